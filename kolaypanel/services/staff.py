import uuid
import logging
from typing import Any

from kolaypanel.schemas.staff import StaffCreate, StaffUpdate
from kolaypanel.services.documents import DocumentStore, require_document

logger = logging.getLogger(__name__)

COLLECTION = "staff"


def get_staff_list(
    store: DocumentStore,
    search: str | None = None,
    staff_status: str | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[list[dict[str, Any]], int]:
    """
    Personel listesi.
    Arama: isim, email, rol veya personel kodu icinde.
    Dondurur: (personel_listesi, toplam_sayi)
    """
    term = (search or "").strip().lower()

    def matches(record: dict[str, Any]) -> bool:
        if staff_status and record.get("status") != staff_status:
            return False
        if not term:
            return True
        return any(
            term in (record.get(field) or "").lower()
            for field in ("name", "email", "role", "staff_code")
        )

    staff = store.read_filtered_documents(COLLECTION, matches)
    total = len(staff)
    offset = (page - 1) * size
    return staff[offset:offset + size], total


def get_staff(store: DocumentStore, staff_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, COLLECTION, staff_id, "Personel bulunamadi")


def create_staff(store: DocumentStore, data: StaffCreate) -> dict[str, Any]:
    record = data.model_dump(mode="json")
    record["staff_code"] = f"ST{store.next_sequence('staff')}"
    staff_id = store.create_document(COLLECTION, record)
    logger.info("Personel '%s' eklendi (%s)", data.name, record["staff_code"])
    return get_staff(store, staff_id)


def update_staff(
    store: DocumentStore, staff_id: uuid.UUID | str, data: StaffUpdate
) -> dict[str, Any]:
    staff = get_staff(store, staff_id)
    return store.update_document(
        COLLECTION, staff["id"], data.model_dump(mode="json", exclude_unset=True)
    )


def delete_staff(store: DocumentStore, staff_id: uuid.UUID | str) -> None:
    staff = get_staff(store, staff_id)
    store.delete_document(COLLECTION, staff["id"])
    logger.info("Personel '%s' silindi", staff.get("staff_code"))
