"""
Dokuman deposu servisi.

Uygulamanin tum sayfalari duz koleksiyonlar halinde JSON dokumanlari okur ve
yazar. Bu modul o sozlesmeyi `documents` tablosu uzerinde uygular:

    create_document(collection, record)        -> id
    read_all_documents(collection)             -> list[dict]
    read_filtered_documents(collection, pred)  -> list[dict]

Her yazma kendi commit'ini yapar. Birden fazla dokumani kapsayan transaction
yoktur; hata olursa oturum geri alinir ve hata cagirana iletilir.
"""

import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kolaypanel.models.document import Document

logger = logging.getLogger(__name__)


def _parse_id(document_id: uuid.UUID | str) -> uuid.UUID | None:
    """Dokuman id'sini UUID'ye cevir. Gecersizse None (bulunamadi gibi davranir)."""
    if isinstance(document_id, uuid.UUID):
        return document_id
    try:
        return uuid.UUID(str(document_id))
    except (ValueError, AttributeError):
        return None


def _to_record(document: Document) -> dict[str, Any]:
    """Satiri {"id": ..., **data} formatina cevir. Zaman damgalari data icinde yoksa kolondan gelir."""
    return {
        "id": str(document.id),
        "created_at": document.created_at,
        "updated_at": document.updated_at,
        **(document.data or {}),
    }


class DocumentStore:
    """
    Bir kullaniciya (owner) ait koleksiyonlara erisim.

    Kullanim:
        store = DocumentStore(db, current_user.id)
        customer_id = store.create_document("customers", {"first_name": "Ali"})
        customers = store.read_all_documents("customers")
    """

    def __init__(self, db: Session, owner_id: uuid.UUID):
        self.db = db
        self.owner_id = owner_id

    def _query(self, collection: str):
        return self.db.query(Document).filter(
            Document.owner_id == self.owner_id,
            Document.collection == collection,
        )

    def _get_row(self, collection: str, document_id: uuid.UUID | str) -> Document | None:
        parsed = _parse_id(document_id)
        if parsed is None:
            return None
        return self._query(collection).filter(Document.id == parsed).first()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def create_document(self, collection: str, record: dict[str, Any]) -> str:
        """Yeni dokuman ekle ve id'sini dondur."""
        data = {k: v for k, v in record.items() if k != "id"}
        document = Document(
            owner_id=self.owner_id,
            collection=collection,
            data=data,
            created_at=datetime.now(timezone.utc),
        )
        self.db.add(document)
        self._commit()
        logger.debug("Dokuman eklendi: %s/%s", collection, document.id)
        return str(document.id)

    def read_all_documents(self, collection: str) -> list[dict[str, Any]]:
        """Koleksiyondaki tum dokumanlar (eskiden yeniye)."""
        rows = self._query(collection).order_by(Document.created_at.asc()).all()
        return [_to_record(row) for row in rows]

    def read_filtered_documents(
        self, collection: str, predicate: Callable[[dict[str, Any]], bool]
    ) -> list[dict[str, Any]]:
        """Koleksiyondaki dokumanlardan predicate'i saglayanlar."""
        return [record for record in self.read_all_documents(collection) if predicate(record)]

    def get_document(self, collection: str, document_id: uuid.UUID | str) -> dict[str, Any] | None:
        row = self._get_row(collection, document_id)
        return _to_record(row) if row else None

    def update_document(
        self, collection: str, document_id: uuid.UUID | str, changes: dict[str, Any]
    ) -> dict[str, Any] | None:
        """
        Dokumani yuzeysel olarak birlestirerek guncelle.
        Dondurur: guncel kayit veya None (bulunamadi).
        """
        row = self._get_row(collection, document_id)
        if row is None:
            return None
        # JSON kolonunda degisiklik algilansin diye yeni dict atanir
        row.data = {**(row.data or {}), **{k: v for k, v in changes.items() if k != "id"}}
        self._commit()
        self.db.refresh(row)
        return _to_record(row)

    def delete_document(self, collection: str, document_id: uuid.UUID | str) -> bool:
        """Dondurur: True (silindi) veya False (bulunamadi)."""
        row = self._get_row(collection, document_id)
        if row is None:
            return False
        self.db.delete(row)
        self._commit()
        logger.debug("Dokuman silindi: %s/%s", collection, document_id)
        return True

    def count_documents(self, collection: str) -> int:
        return self._query(collection).count()

    def next_sequence(self, name: str) -> int:
        """
        Kullaniciya ozel sayac (musteri kodu CT1, CT2 ... icin).
        Sayaclar "counters" koleksiyonunda tutulur.
        """
        row = next(
            (c for c in self._query("counters").all() if (c.data or {}).get("name") == name),
            None,
        )
        if row is None:
            row = Document(
                owner_id=self.owner_id, collection="counters", data={"name": name, "value": 1}
            )
            self.db.add(row)
            self._commit()
            return 1
        value = int(row.data.get("value", 0)) + 1
        row.data = {**row.data, "value": value}
        self._commit()
        return value


def require_document(
    store: DocumentStore, collection: str, document_id: uuid.UUID | str, detail: str
) -> dict[str, Any]:
    """Dokumani getir, yoksa 404."""
    record = store.get_document(collection, document_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return record
