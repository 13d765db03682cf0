import uuid
from typing import Any

from kolaypanel.schemas.biller import BillerCreate, BillerUpdate
from kolaypanel.services.documents import DocumentStore, require_document

COLLECTION = "billers"


def get_billers(store: DocumentStore) -> list[dict[str, Any]]:
    return sorted(store.read_all_documents(COLLECTION), key=lambda b: (b.get("name") or "").lower())


def get_biller(store: DocumentStore, biller_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, COLLECTION, biller_id, "Faturalayan kisi bulunamadi")


def create_biller(store: DocumentStore, data: BillerCreate) -> dict[str, Any]:
    biller_id = store.create_document(COLLECTION, data.model_dump(mode="json"))
    return get_biller(store, biller_id)


def update_biller(
    store: DocumentStore, biller_id: uuid.UUID | str, data: BillerUpdate
) -> dict[str, Any]:
    biller = get_biller(store, biller_id)
    return store.update_document(
        COLLECTION, biller["id"], data.model_dump(mode="json", exclude_unset=True)
    )


def delete_biller(store: DocumentStore, biller_id: uuid.UUID | str) -> None:
    biller = get_biller(store, biller_id)
    store.delete_document(COLLECTION, biller["id"])
