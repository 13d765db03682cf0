from fastapi import APIRouter, Query, status

from kolaypanel.dependencies import ContextDep, StoreDep
from kolaypanel.schemas.blog import BlogCreate, BlogResponse, BlogUpdate
from kolaypanel.services import blog as blog_service

router = APIRouter()


@router.get("", response_model=list[BlogResponse])
def list_blogs(
    store: StoreDep,
    blog_status: str | None = Query(default=None, alias="status", description="draft/scheduled/published"),
):
    return blog_service.get_blogs(store, blog_status)


@router.post("", response_model=BlogResponse, status_code=status.HTTP_201_CREATED)
def create_blog(data: BlogCreate, store: StoreDep, ctx: ContextDep):
    """
    Yeni blog yazisi.
    Yazar bilgisi oturumdaki kullanicidan alinir.
    """
    return blog_service.create_blog(store, data, ctx)


@router.get("/{blog_id}", response_model=BlogResponse)
def get_blog(blog_id: str, store: StoreDep):
    return blog_service.get_blog(store, blog_id)


@router.put("/{blog_id}", response_model=BlogResponse)
def update_blog(blog_id: str, data: BlogUpdate, store: StoreDep):
    return blog_service.update_blog(store, blog_id, data)


@router.post("/{blog_id}/view", response_model=BlogResponse)
def record_view(blog_id: str, store: StoreDep):
    """Goruntulenme sayisini bir artir."""
    return blog_service.record_view(store, blog_id)


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_blog(blog_id: str, store: StoreDep):
    blog_service.delete_blog(store, blog_id)
