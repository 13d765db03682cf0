"""
Stok yonetimi: urun/hizmet kategorileri, urunler ve hizmetler.

Fatura kalemleri buradaki kayitlardan secilir (bkz. services/catalog.py):
urunlerde satis fiyati, hizmetlerde maliyet birim fiyat olarak kullanilir.
"""

import uuid
import logging
from typing import Any

from fastapi import HTTPException, status

from kolaypanel.schemas.inventory import (
    CategoryCreate,
    ProductCreate,
    ProductUpdate,
    ServiceCreate,
    ServiceUpdate,
)
from kolaypanel.services.documents import DocumentStore, require_document
from kolaypanel.services.export import csv_response

logger = logging.getLogger(__name__)

PRODUCTS = "products"
SERVICES = "services"
CATEGORY_COLLECTIONS = {"product": "productcategory", "service": "servicecategory"}

PRODUCT_CSV_HEADERS = [
    "Product Code", "Name", "Category", "Quantity",
    "Purchase Price", "Selling Price", "Tax",
]
SERVICE_CSV_HEADERS = ["Service Code", "Name", "Category", "Cost"]


# --- Kategoriler ---

def _category_collection(kind: str) -> str:
    try:
        return CATEGORY_COLLECTIONS[kind]
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Gecersiz kategori tipi (product/service)",
        )


def get_categories(store: DocumentStore, kind: str) -> list[dict[str, Any]]:
    """Kategoriler isme gore sirali."""
    categories = store.read_all_documents(_category_collection(kind))
    return sorted(categories, key=lambda c: (c.get("name") or "").lower())


def create_category(store: DocumentStore, kind: str, data: CategoryCreate) -> dict[str, Any]:
    collection = _category_collection(kind)
    category_id = store.create_document(collection, {"name": data.name.strip()})
    return store.get_document(collection, category_id)


def delete_category(store: DocumentStore, kind: str, category_id: uuid.UUID | str) -> bool:
    """
    Kategoriyi sil. Bagli urun/hizmetler silinmez, kategori adi "Unknown" gorunur.
    Dondurur: True (basarili) veya False (bulunamadi).
    """
    return store.delete_document(_category_collection(kind), category_id)


def _category_names(store: DocumentStore, kind: str) -> dict[str, str]:
    return {c["id"]: c.get("name", "") for c in store.read_all_documents(_category_collection(kind))}


def _require_category(store: DocumentStore, kind: str, category_id: str) -> None:
    require_document(store, _category_collection(kind), category_id, "Kategori bulunamadi")


def _with_category_name(record: dict[str, Any], names: dict[str, str]) -> dict[str, Any]:
    return {**record, "category_name": names.get(record.get("category"), "Unknown")}


def _filter(
    store: DocumentStore, collection: str, kind: str,
    search: str | None, category: str | None,
) -> list[dict[str, Any]]:
    term = (search or "").strip().lower()
    code_field = "product_code" if kind == "product" else "service_code"

    def matches(record: dict[str, Any]) -> bool:
        if category and record.get("category") != category:
            return False
        if term:
            return term in (record.get("name") or "").lower() or term in (
                record.get(code_field) or ""
            ).lower()
        return True

    names = _category_names(store, kind)
    records = store.read_filtered_documents(collection, matches)
    return [_with_category_name(r, names) for r in records]


# --- Urunler ---

def get_products(
    store: DocumentStore, search: str | None = None, category: str | None = None
) -> list[dict[str, Any]]:
    """Urun listesi (kategori adi cozulmus halde)."""
    return _filter(store, PRODUCTS, "product", search, category)


def get_product(store: DocumentStore, product_id: uuid.UUID | str) -> dict[str, Any]:
    product = require_document(store, PRODUCTS, product_id, "Urun bulunamadi")
    return _with_category_name(product, _category_names(store, "product"))


def create_product(store: DocumentStore, data: ProductCreate) -> dict[str, Any]:
    _require_category(store, "product", data.category)
    record = data.model_dump(mode="json")
    record["product_code"] = f"PRD{store.next_sequence('products')}"
    product_id = store.create_document(PRODUCTS, record)
    logger.info("Urun '%s' olusturuldu (%s)", data.name, record["product_code"])
    return get_product(store, product_id)


def update_product(
    store: DocumentStore, product_id: uuid.UUID | str, data: ProductUpdate
) -> dict[str, Any]:
    product = get_product(store, product_id)
    changes = data.model_dump(mode="json", exclude_unset=True)
    if changes.get("category"):
        _require_category(store, "product", changes["category"])
    store.update_document(PRODUCTS, product["id"], changes)
    return get_product(store, product["id"])


def delete_product(store: DocumentStore, product_id: uuid.UUID | str) -> None:
    product = get_product(store, product_id)
    store.delete_document(PRODUCTS, product["id"])
    logger.info("Urun '%s' silindi", product.get("name"))


def adjust_stock(
    store: DocumentStore, product_id: uuid.UUID | str, delta: int, reason: str | None = None
) -> dict[str, Any]:
    """
    Stok miktarini delta kadar degistir.
    Sonuc 0'in altina dusecekse islem reddedilir (400).
    """
    product = get_product(store, product_id)
    previous = int(product.get("quantity") or 0)
    new_quantity = previous + delta
    if new_quantity < 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Yetersiz stok. Mevcut: {previous}, Cikarilmak istenen: {-delta}",
        )
    store.update_document(PRODUCTS, product["id"], {"quantity": new_quantity})
    logger.info(
        "Stok guncellendi: %s %d -> %d (%s)",
        product.get("product_code"), previous, new_quantity, reason or "-",
    )
    return get_product(store, product["id"])


def export_products_csv(store: DocumentStore, search: str | None = None, category: str | None = None):
    rows = [
        [
            p.get("product_code"), p.get("name"), p.get("category_name"), p.get("quantity"),
            p.get("purchase_price"), p.get("selling_price"), p.get("tax"),
        ]
        for p in get_products(store, search, category)
    ]
    return csv_response("products", PRODUCT_CSV_HEADERS, rows)


# --- Hizmetler ---

def get_services(
    store: DocumentStore, search: str | None = None, category: str | None = None
) -> list[dict[str, Any]]:
    return _filter(store, SERVICES, "service", search, category)


def get_service(store: DocumentStore, service_id: uuid.UUID | str) -> dict[str, Any]:
    service = require_document(store, SERVICES, service_id, "Hizmet bulunamadi")
    return _with_category_name(service, _category_names(store, "service"))


def create_service(store: DocumentStore, data: ServiceCreate) -> dict[str, Any]:
    _require_category(store, "service", data.category)
    record = data.model_dump(mode="json")
    record["service_code"] = f"SRV{store.next_sequence('services')}"
    service_id = store.create_document(SERVICES, record)
    logger.info("Hizmet '%s' olusturuldu (%s)", data.name, record["service_code"])
    return get_service(store, service_id)


def update_service(
    store: DocumentStore, service_id: uuid.UUID | str, data: ServiceUpdate
) -> dict[str, Any]:
    service = get_service(store, service_id)
    changes = data.model_dump(mode="json", exclude_unset=True)
    if changes.get("category"):
        _require_category(store, "service", changes["category"])
    store.update_document(SERVICES, service["id"], changes)
    return get_service(store, service["id"])


def delete_service(store: DocumentStore, service_id: uuid.UUID | str) -> None:
    service = get_service(store, service_id)
    store.delete_document(SERVICES, service["id"])


def export_services_csv(store: DocumentStore, search: str | None = None, category: str | None = None):
    rows = [
        [s.get("service_code"), s.get("name"), s.get("category_name"), s.get("cost")]
        for s in get_services(store, search, category)
    ]
    return csv_response("services", SERVICE_CSV_HEADERS, rows)
