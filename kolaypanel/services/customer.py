import uuid
import logging
from typing import Any

from kolaypanel.schemas.customer import CustomerCreate, CustomerUpdate
from kolaypanel.services.documents import DocumentStore, require_document

logger = logging.getLogger(__name__)

COLLECTION = "customers"


def build_search_terms(record: dict[str, Any]) -> list[str]:
    """Arama icin kucuk harfli anahtar kelimeler (bos olanlar atlanir)."""
    first = (record.get("first_name") or "").lower()
    last = (record.get("last_name") or "").lower()
    terms = [
        (record.get("customer_code") or "").lower(),
        first,
        last,
        f"{first} {last}".strip(),
        (record.get("email") or "").lower(),
        record.get("phone") or "",
    ]
    return [t for t in terms if t]


def _normalize_contact(record: dict[str, Any]) -> dict[str, Any]:
    # Secilmeyen iletisim kanali bos birakilir
    if record.get("contact_type") == "phone":
        record["email"] = None
    elif record.get("contact_type") == "email":
        record["phone"] = None
    return record


def get_customers(
    store: DocumentStore,
    search: str | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[list[dict[str, Any]], int]:
    """
    Musteri listesi (en yeni once).
    Dondurur: (musteri_listesi, toplam_sayi)
    """
    term = (search or "").strip().lower()
    customers = store.read_filtered_documents(
        COLLECTION,
        lambda r: not term or any(term in t for t in r.get("search_terms", [])),
    )
    customers.reverse()
    total = len(customers)
    offset = (page - 1) * size
    return customers[offset:offset + size], total


def get_customer(store: DocumentStore, customer_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, COLLECTION, customer_id, "Musteri bulunamadi")


def create_customer(store: DocumentStore, data: CustomerCreate) -> dict[str, Any]:
    record = _normalize_contact(data.model_dump(mode="json"))
    record["customer_code"] = f"CT{store.next_sequence('customers')}"
    record["search_terms"] = build_search_terms(record)
    customer_id = store.create_document(COLLECTION, record)
    logger.info("Musteri '%s' olusturuldu", record["customer_code"])
    return get_customer(store, customer_id)


def update_customer(
    store: DocumentStore, customer_id: uuid.UUID | str, data: CustomerUpdate
) -> dict[str, Any]:
    """Sadece gonderilen alanlar degisir, arama terimleri yeniden hesaplanir."""
    customer = get_customer(store, customer_id)
    merged = _normalize_contact({**customer, **data.model_dump(mode="json", exclude_unset=True)})
    merged["search_terms"] = build_search_terms(merged)
    changes = {k: v for k, v in merged.items() if k not in ("id", "created_at", "updated_at")}
    return store.update_document(COLLECTION, customer["id"], changes)


def delete_customer(store: DocumentStore, customer_id: uuid.UUID | str) -> None:
    customer = get_customer(store, customer_id)
    store.delete_document(COLLECTION, customer["id"])
    logger.info("Musteri '%s' silindi", customer.get("customer_code"))
