"""
Katalog arama servisi.

Fatura formu acildiginda urun ve hizmet listeleri bir kez okunur
(CatalogSnapshot). Kalem secildiginde fiyat ve aciklama kaleme kopyalanir;
katalogda sonradan yapilan degisiklikler secilmis kalemleri etkilemez.
"""

import logging
from decimal import Decimal
from typing import Any, Iterable

from pydantic import BaseModel

from kolaypanel.schemas.invoice import LineItem, coerce_price
from kolaypanel.services.documents import DocumentStore

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    id: str
    name: str
    description: str | None = None
    price: Decimal = Decimal("0")


class CatalogSnapshot(BaseModel):
    """Salt okunur urun/hizmet haritalari (id -> kayit)."""
    products: dict[str, CatalogEntry] = {}
    services: dict[str, CatalogEntry] = {}

    def entries(self, item_type: str) -> dict[str, CatalogEntry]:
        if item_type == "product":
            return self.products
        if item_type == "service":
            return self.services
        return {}

    def entry(self, item_type: str, catalog_id: str) -> CatalogEntry | None:
        return self.entries(item_type).get(catalog_id)


def _product_entry(record: dict[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        id=record["id"],
        name=record.get("name") or "",
        description=record.get("description"),
        price=coerce_price(record.get("selling_price")),
    )


def _service_entry(record: dict[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        id=record["id"],
        name=record.get("name") or "",
        description=record.get("description"),
        price=coerce_price(record.get("cost")),
    )


def load_catalog(store: DocumentStore) -> CatalogSnapshot:
    """Urun ve hizmet koleksiyonlarini tek seferde oku."""
    products = {r["id"]: _product_entry(r) for r in store.read_all_documents("products")}
    services = {r["id"]: _service_entry(r) for r in store.read_all_documents("services")}
    logger.debug("Katalog yuklendi: %d urun, %d hizmet", len(products), len(services))
    return CatalogSnapshot(products=products, services=services)


def is_duplicate(
    items: Iterable[LineItem],
    catalog_id: str,
    item_type: str,
    excluding_index: int | None = None,
) -> bool:
    """
    Ayni tipteki baska bir kalem bu katalog kaydini zaten kullaniyor mu?
    Farkli tipler (ayni id'li urun ve hizmet) cakisma sayilmaz.
    """
    for index, item in enumerate(items):
        if index == excluding_index:
            continue
        if item.type == item_type and item.catalog_id == catalog_id:
            return True
    return False


def available_entries(
    catalog: CatalogSnapshot,
    items: list[LineItem],
    item_type: str,
    excluding_index: int | None = None,
) -> list[CatalogEntry]:
    """Secim listesi: baska kalemlerde kullanilmis kayitlar cikarilir."""
    return [
        entry for entry in catalog.entries(item_type).values()
        if not is_duplicate(items, entry.id, item_type, excluding_index)
    ]
