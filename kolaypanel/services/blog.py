import re
import uuid
import logging
from datetime import datetime, timezone
from typing import Any

from kolaypanel.schemas.blog import BlogCreate, BlogUpdate
from kolaypanel.schemas.user import AuthContext
from kolaypanel.services.documents import DocumentStore, require_document

logger = logging.getLogger(__name__)

COLLECTION = "blogs"


def slugify(title: str) -> str:
    """'Yeni Urunler 2024!' -> 'yeni-urunler-2024'"""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def resolve_status(
    action: str, publish_type: str, publish_date: datetime | None, now: datetime | None = None
) -> str:
    """
    draft     : taslak olarak kaydedildi
    scheduled : yayinlanacak ama tarih ileride
    published : yayinda
    """
    if action == "draft":
        return "draft"
    now = now or datetime.now(timezone.utc)
    if publish_type == "setDate" and publish_date and _aware(publish_date) > now:
        return "scheduled"
    return "published"


def _publish_fields(action: str, publish_type: str, publish_date: datetime | None) -> dict[str, Any]:
    blog_status = resolve_status(action, publish_type, publish_date)
    if publish_type == "automatic" and blog_status == "published":
        publish_date = datetime.now(timezone.utc)
    return {
        "publish_type": publish_type,
        "publish_date": publish_date.isoformat() if publish_date else None,
        "status": blog_status,
        "scheduled_publish": blog_status == "scheduled",
    }


def get_blogs(store: DocumentStore, blog_status: str | None = None) -> list[dict[str, Any]]:
    """Blog listesi (en yeni once). 'scheduled' filtresi zamanlanmis yazilari da kapsar."""

    def matches(record: dict[str, Any]) -> bool:
        if not blog_status:
            return True
        if blog_status == "scheduled" and record.get("scheduled_publish"):
            return True
        return record.get("status") == blog_status

    blogs = store.read_filtered_documents(COLLECTION, matches)
    blogs.reverse()
    return blogs


def get_blog(store: DocumentStore, blog_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, COLLECTION, blog_id, "Blog yazisi bulunamadi")


def create_blog(store: DocumentStore, data: BlogCreate, ctx: AuthContext) -> dict[str, Any]:
    record = data.model_dump(mode="json", exclude={"action", "publish_type", "publish_date"})
    record["slug"] = slugify(data.title)
    record.update(_publish_fields(data.action, data.publish_type, data.publish_date))
    record["author"] = {"id": str(ctx.user_id), "name": ctx.full_name, "email": ctx.email}
    record["views"] = 0
    blog_id = store.create_document(COLLECTION, record)
    logger.info("Blog yazisi '%s' kaydedildi (%s)", record["slug"], record["status"])
    return get_blog(store, blog_id)


def update_blog(
    store: DocumentStore, blog_id: uuid.UUID | str, data: BlogUpdate
) -> dict[str, Any]:
    """
    Sadece gonderilen alanlar degisir.
    Baslik degisirse slug, yayin alanlari degisirse durum yeniden hesaplanir.
    """
    blog = get_blog(store, blog_id)
    provided = data.model_dump(exclude_unset=True)
    changes = data.model_dump(
        mode="json", exclude_unset=True, exclude={"action", "publish_type", "publish_date"}
    )
    if "title" in changes:
        changes["slug"] = slugify(changes["title"])

    if {"action", "publish_type", "publish_date"} & provided.keys():
        action = provided.get("action") or ("draft" if blog.get("status") == "draft" else "publish")
        publish_type = provided.get("publish_type") or blog.get("publish_type", "automatic")
        if "publish_date" in provided:
            publish_date = provided["publish_date"]
        else:
            stored = blog.get("publish_date")
            publish_date = datetime.fromisoformat(stored) if stored else None
        changes.update(_publish_fields(action, publish_type, publish_date))

    changes["updated_at"] = datetime.now(timezone.utc).isoformat()
    return store.update_document(COLLECTION, blog["id"], changes)


def delete_blog(store: DocumentStore, blog_id: uuid.UUID | str) -> None:
    blog = get_blog(store, blog_id)
    store.delete_document(COLLECTION, blog["id"])
    logger.info("Blog yazisi '%s' silindi", blog.get("slug"))


def record_view(store: DocumentStore, blog_id: uuid.UUID | str) -> dict[str, Any]:
    blog = get_blog(store, blog_id)
    return store.update_document(COLLECTION, blog["id"], {"views": int(blog.get("views") or 0) + 1})
