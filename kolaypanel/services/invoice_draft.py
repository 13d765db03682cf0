"""
Fatura taslagi islemleri.

Her fonksiyon formdaki tek bir mantiksal degisikligi uygular ve taslagi
yerinde gunceller. Kalem toplamlari her degisiklikte yeniden hesaplanir.
Kaydedilmekte olan (submitting) veya kaydedilmis (persisted) taslaklar
degistirilemez.
"""

import logging
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status

from kolaypanel.exceptions import (
    CatalogEntryNotFoundError,
    DraftLockedError,
    DuplicateSelectionError,
    InvalidOperationError,
)
from kolaypanel.schemas.invoice import (
    InvoiceDraft,
    LineItem,
    coerce_price,
    coerce_quantity,
    to_decimal,
)
from kolaypanel.services.catalog import CatalogSnapshot, is_duplicate
from kolaypanel.services.totals import calculate_totals

logger = logging.getLogger(__name__)

LOCKED_STATES = ("submitting", "persisted")


def ensure_editable(draft: InvoiceDraft) -> None:
    if draft.state in LOCKED_STATES:
        raise DraftLockedError(draft.state)


def _edited(draft: InvoiceDraft) -> InvoiceDraft:
    # Basarili her degisiklik onizlemedeki taslagi tekrar duzenleme moduna alir.
    # Reddedilen islem taslagin durumuna dokunmaz.
    draft.state = "editing"
    return draft


def _get_item(draft: InvoiceDraft, index: int) -> LineItem:
    if index < 0 or index >= len(draft.items):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Fatura kalemi bulunamadi",
        )
    return draft.items[index]


def new_draft() -> InvoiceDraft:
    """Varsayilan degerlerle bos taslak (tek bos urun kalemi)."""
    return InvoiceDraft()


def add_item(draft: InvoiceDraft, item_type: str = "product") -> InvoiceDraft:
    ensure_editable(draft)
    draft.items.append(LineItem(type=item_type))
    return _edited(draft)


def remove_item(draft: InvoiceDraft, index: int) -> InvoiceDraft:
    ensure_editable(draft)
    _get_item(draft, index)
    del draft.items[index]
    return _edited(draft)


def set_item_type(draft: InvoiceDraft, index: int, new_type: str) -> InvoiceDraft:
    """
    Kalem tipini degistir.
    Onceki secim gecersiz olur: referans ve aciklama temizlenir,
    miktar 1, fiyat ve toplam 0 yapilir.
    """
    ensure_editable(draft)
    item = _get_item(draft, index)
    item.type = new_type
    item.product_id = None
    item.service_id = None
    item.description = ""
    item.quantity = 1
    item.unit_price = Decimal("0")
    item.recompute()
    return _edited(draft)


def select_catalog_entry(
    draft: InvoiceDraft, index: int, catalog_id: str, catalog: CatalogSnapshot
) -> InvoiceDraft:
    """
    Kaleme katalogdan urun/hizmet sec.
    Ayni kayit ayni tipte baska bir kalemde seciliyse islem iptal edilir,
    taslagin geri kalani degismez.
    """
    ensure_editable(draft)
    item = _get_item(draft, index)
    if item.type == "custom":
        raise InvalidOperationError(
            "Ozel kaleme katalog kaydi secilemez",
            error_code="CUSTOM_ITEM_SELECTION",
        )

    if is_duplicate(draft.items, catalog_id, item.type, excluding_index=index):
        logger.info("Tekrarlanan katalog secimi engellendi: %s/%s", item.type, catalog_id)
        raise DuplicateSelectionError(item.type, catalog_id)

    entry = catalog.entry(item.type, catalog_id)
    if entry is None:
        raise CatalogEntryNotFoundError(item.type, catalog_id)

    if item.type == "product":
        item.product_id = entry.id
    else:
        item.service_id = entry.id
    item.description = entry.description or entry.name
    item.unit_price = entry.price
    item.recompute()
    return _edited(draft)


def set_quantity(draft: InvoiceDraft, index: int, value: Any) -> InvoiceDraft:
    ensure_editable(draft)
    item = _get_item(draft, index)
    item.quantity = coerce_quantity(value)
    item.recompute()
    return _edited(draft)


def set_unit_price(draft: InvoiceDraft, index: int, value: Any) -> InvoiceDraft:
    ensure_editable(draft)
    item = _get_item(draft, index)
    item.unit_price = coerce_price(value)
    item.recompute()
    return _edited(draft)


def set_description(draft: InvoiceDraft, index: int, value: Any) -> InvoiceDraft:
    ensure_editable(draft)
    item = _get_item(draft, index)
    item.description = "" if value is None else str(value)
    return _edited(draft)


def set_amount_paid(draft: InvoiceDraft, value: Any) -> InvoiceDraft:
    """
    Kismi odeme tutari. Girilen deger [0, genel toplam] araligina cekilir.
    Sayi olmayan giris tutari temizler (kayit sirasinda zorunlu alan hatasi verir).
    """
    ensure_editable(draft)
    amount = to_decimal(value)
    if amount is None:
        draft.amount_paid = None
        return _edited(draft)
    total_amount = calculate_totals(draft.items, draft.tax_rate_percent).total_amount
    draft.amount_paid = min(max(amount, Decimal("0")), total_amount)
    return _edited(draft)
