"""
Stok REST API Router'i.

Endpoint'ler:
    GET/POST  /categories/{kind}              -> Kategoriler (kind: product/service)
    DELETE    /categories/{kind}/{id}         -> Kategori sil
    GET/POST  /products                       -> Urun listesi / yeni urun
    GET       /products/export                -> Urun CSV
    GET/PUT/DELETE /products/{id}
    POST      /products/{id}/stock            -> Stok girisi/cikisi
    GET/POST  /services                       -> Hizmet listesi / yeni hizmet
    GET       /services/export                -> Hizmet CSV
    GET/PUT/DELETE /services/{id}
"""

from fastapi import APIRouter, HTTPException, Query, status

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.inventory import (
    CategoryCreate,
    CategoryResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    ServiceCreate,
    ServiceResponse,
    ServiceUpdate,
    StockAdjust,
)
from kolaypanel.services import inventory as inventory_service

router = APIRouter()


# --- Kategoriler ---

@router.get("/categories/{kind}", response_model=list[CategoryResponse])
def list_categories(kind: str, store: StoreDep):
    return inventory_service.get_categories(store, kind)


@router.post(
    "/categories/{kind}", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED
)
def create_category(kind: str, data: CategoryCreate, store: StoreDep):
    return inventory_service.create_category(store, kind, data)


@router.delete("/categories/{kind}/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(kind: str, category_id: str, store: StoreDep):
    if not inventory_service.delete_category(store, kind, category_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Kategori bulunamadi")


# --- Urunler ---

@router.get("/products", response_model=list[ProductResponse])
def list_products(
    store: StoreDep,
    search: str | None = Query(default=None, description="Urun adi veya kodu"),
    category: str | None = Query(default=None, description="Kategori id"),
):
    return inventory_service.get_products(store, search, category)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(data: ProductCreate, store: StoreDep):
    """Yeni urun. Urun kodu (PRD1, PRD2 ...) otomatik verilir."""
    return inventory_service.create_product(store, data)


@router.get("/products/export")
def export_products(
    store: StoreDep,
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
):
    return inventory_service.export_products_csv(store, search, category)


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, store: StoreDep):
    return inventory_service.get_product(store, product_id)


@router.put("/products/{product_id}", response_model=ProductResponse)
def update_product(product_id: str, data: ProductUpdate, store: StoreDep):
    return inventory_service.update_product(store, product_id, data)


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, store: StoreDep):
    inventory_service.delete_product(store, product_id)


@router.post("/products/{product_id}/stock", response_model=ProductResponse)
def adjust_stock(product_id: str, data: StockAdjust, store: StoreDep):
    """Stok hareketi. Stok 0'in altina dusurulemez."""
    return inventory_service.adjust_stock(store, product_id, data.delta, data.reason)


# --- Hizmetler ---

@router.get("/services", response_model=list[ServiceResponse])
def list_services(
    store: StoreDep,
    search: str | None = Query(default=None, description="Hizmet adi veya kodu"),
    category: str | None = Query(default=None, description="Kategori id"),
):
    return inventory_service.get_services(store, search, category)


@router.post("/services", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
def create_service(data: ServiceCreate, store: StoreDep):
    return inventory_service.create_service(store, data)


@router.get("/services/export")
def export_services(
    store: StoreDep,
    search: str | None = Query(default=None),
    category: str | None = Query(default=None),
):
    return inventory_service.export_services_csv(store, search, category)


@router.get("/services/{service_id}", response_model=ServiceResponse)
def get_service(service_id: str, store: StoreDep):
    return inventory_service.get_service(store, service_id)


@router.put("/services/{service_id}", response_model=ServiceResponse)
def update_service(service_id: str, data: ServiceUpdate, store: StoreDep):
    return inventory_service.update_service(store, service_id, data)


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: str, store: StoreDep):
    inventory_service.delete_service(store, service_id)
