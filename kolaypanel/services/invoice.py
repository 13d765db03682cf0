import uuid
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from kolaypanel.exceptions import DraftLockedError, InvoiceValidationError, PersistenceError
from kolaypanel.schemas.invoice import (
    InvoiceDraft,
    InvoiceTotals,
    UPI_PAYMENT_METHOD,
    to_decimal,
)
from kolaypanel.schemas.user import AuthContext
from kolaypanel.services.catalog import is_duplicate
from kolaypanel.services.documents import DocumentStore
from kolaypanel.services.export import csv_response
from kolaypanel.services.totals import calculate_totals, round_money, round_totals

logger = logging.getLogger(__name__)

COLLECTION = "invoices"

# Kayit aninda musteri ve faturalayan kisiden kopyalanan alanlar.
# Kopyalar donmus kalir; musteri sonradan guncellense de eski faturalar degismez.
CUSTOMER_SNAPSHOT_FIELDS = (
    "customer_code", "first_name", "last_name", "email", "phone",
    "country", "state", "district", "city", "pincode",
)
BILLER_SNAPSHOT_FIELDS = (
    "name", "company", "email", "phone",
    "address", "city", "state", "country", "pincode",
)

INVOICE_CSV_HEADERS = [
    "Invoice Number", "Customer", "Invoice Date", "Due Date", "Payment Status",
    "Subtotal", "Tax", "Total", "Amount Paid", "Due Amount",
]


def customer_display_name(customer: dict[str, Any]) -> str:
    full_name = " ".join(
        part for part in (customer.get("first_name"), customer.get("last_name")) if part
    )
    return full_name or customer.get("name") or ""


def _snapshot(record: dict[str, Any], fields: tuple[str, ...]) -> dict[str, Any]:
    snapshot = {"id": record["id"]}
    snapshot.update({field: record.get(field) for field in fields})
    return snapshot


def validate_draft(
    draft: InvoiceDraft,
    customer: dict[str, Any] | None,
    biller: dict[str, Any] | None,
    totals: InvoiceTotals,
) -> dict[str, list[str]]:
    """
    Tum kontrolleri calistir, ilk hatada durma.
    Dondurur: {alan: [hata mesajlari]} (bos dict = gecerli)
    """
    errors: dict[str, list[str]] = {}

    def add(field: str, message: str) -> None:
        errors.setdefault(field, []).append(message)

    # 1-2. Musteri ve faturalayan kisi
    if not draft.customer_id:
        add("customer_id", "Lutfen bir musteri secin")
    elif customer is None:
        add("customer_id", "Secilen musteri bulunamadi")

    if not draft.biller_id:
        add("biller_id", "Lutfen faturalayan kisiyi secin")
    elif biller is None:
        add("biller_id", "Secilen faturalayan kisi bulunamadi")

    # 3. Tarihler
    if draft.invoice_date is None:
        add("invoice_date", "Fatura tarihi zorunlu")
    if draft.due_date is None:
        add("due_date", "Vade tarihi zorunlu")

    # 4. UPI odemesinde UPI ID zorunlu
    if draft.payment_method == UPI_PAYMENT_METHOD and not (draft.upi_id or "").strip():
        add("upi_id", "UPI ile odemede UPI ID zorunlu")

    # 5-6. Kalemler
    if not draft.items:
        add("items", "Lutfen en az bir kalem ekleyin")
    for index, item in enumerate(draft.items):
        field = f"items.{index}"
        if item.type in ("product", "service") and not item.catalog_id:
            label = "urun" if item.type == "product" else "hizmet"
            add(field, f"Lutfen bir {label} secin")
        elif item.type in ("product", "service") and is_duplicate(
            draft.items, item.catalog_id, item.type, excluding_index=index
        ):
            add(field, "Ayni kayit birden fazla kalemde secilemez")
        if item.type == "custom" and not item.description.strip():
            add(field, "Aciklama zorunlu")
        quantity = to_decimal(item.quantity)
        if quantity is None or quantity <= 0:
            add(field, "Miktar en az 1 olmali")
        price = to_decimal(item.unit_price)
        if price is None or price < 0:
            add(field, "Fiyat negatif olamaz")

    # 7. Kismi odeme
    if draft.payment_status == "Paid" and draft.payment_type == "custom":
        if draft.amount_paid is None:
            add("amount_paid", "Odenen tutar zorunlu")
        elif draft.amount_paid > totals.total_amount:
            add("amount_paid", "Odenen tutar genel toplami gecemez")

    return errors


def _load_parties(
    store: DocumentStore, draft: InvoiceDraft
) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    customer = store.get_document("customers", draft.customer_id) if draft.customer_id else None
    biller = store.get_document("billers", draft.biller_id) if draft.biller_id else None
    return customer, biller


def _draft_totals(draft: InvoiceDraft) -> InvoiceTotals:
    return calculate_totals(
        draft.items,
        draft.tax_rate_percent,
        draft.payment_status,
        draft.payment_type,
        draft.amount_paid,
    )


def preview_invoice(
    store: DocumentStore, draft: InvoiceDraft
) -> tuple[InvoiceTotals, dict[str, list[str]]]:
    """
    Kaydetmeden onizleme: toplamlar ve dogrulama hatalari.
    Taslak 'previewing' durumuna gecer.
    """
    if draft.state in ("submitting", "persisted"):
        raise DraftLockedError(draft.state)
    customer, biller = _load_parties(store, draft)
    totals = _draft_totals(draft)
    errors = validate_draft(draft, customer, biller, totals)
    draft.state = "previewing"
    return totals, errors


def build_invoice_record(
    draft: InvoiceDraft,
    customer: dict[str, Any],
    biller: dict[str, Any],
    totals: InvoiceTotals,
    ctx: AuthContext,
) -> dict[str, Any]:
    """Kaydedilecek degismez fatura dokumani (JSON uyumlu)."""
    rounded = round_totals(totals)
    customer_snapshot = _snapshot(customer, CUSTOMER_SNAPSHOT_FIELDS)
    customer_snapshot["name"] = customer_display_name(customer)
    return {
        "invoice_number": draft.invoice_number,
        "invoice_date": draft.invoice_date.isoformat(),
        "due_date": draft.due_date.isoformat(),
        "customer_id": customer["id"],
        "customer": customer_snapshot,
        "biller_id": biller["id"],
        "biller": _snapshot(biller, BILLER_SNAPSHOT_FIELDS),
        "payment_method": draft.payment_method,
        "upi_id": draft.upi_id if draft.payment_method == UPI_PAYMENT_METHOD else None,
        "payment_status": draft.payment_status,
        "payment_type": draft.payment_type,
        "amount_paid": str(rounded.amount_paid),
        "due_amount": str(rounded.due_amount),
        "tax_rate_percent": str(draft.tax_rate_percent),
        "notes": draft.notes,
        "items": [
            {
                "id": item.id,
                "type": item.type,
                "product_id": item.product_id,
                "service_id": item.service_id,
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": str(item.unit_price),
                "line_total": str(round_money(item.line_total)),
            }
            for item in draft.items
        ],
        "subtotal": str(rounded.subtotal),
        "tax_amount": str(rounded.tax_amount),
        "total_amount": str(rounded.total_amount),
        "created_at": datetime.now(timezone.utc).isoformat(),
        "created_by": str(ctx.user_id),
    }


def submit_invoice(store: DocumentStore, draft: InvoiceDraft, ctx: AuthContext) -> dict[str, Any]:
    """
    Taslagi dogrula ve tek bir yazma ile kaydet.

    Akis: editing/previewing -> submitting -> persisted
    Hata olursa taslak 'editing' durumuna doner ve girilen bilgiler korunur.
    """
    if draft.state in ("submitting", "persisted"):
        raise DraftLockedError(draft.state)
    draft.state = "submitting"

    customer, biller = _load_parties(store, draft)
    totals = _draft_totals(draft)
    errors = validate_draft(draft, customer, biller, totals)
    if errors:
        draft.state = "editing"
        raise InvoiceValidationError(errors)

    record = build_invoice_record(draft, customer, biller, totals, ctx)
    try:
        invoice_id = store.create_document(COLLECTION, record)
    except SQLAlchemyError as e:
        draft.state = "editing"
        logger.error("Fatura kaydedilemedi (%s): %s", draft.invoice_number, e)
        raise PersistenceError("Fatura kaydedilemedi. Lutfen tekrar deneyin.")

    draft.state = "persisted"
    logger.info(
        "Fatura '%s' olusturuldu (%s)", draft.invoice_number, customer_display_name(customer)
    )
    return {"id": invoice_id, **record}


# --- Kaydedilmis faturalar ---

def get_invoices(
    store: DocumentStore,
    search: str | None = None,
    payment_status: str | None = None,
    customer_id: str | None = None,
    page: int = 1,
    size: int = 20,
) -> tuple[list[dict[str, Any]], int]:
    """
    Fatura listesi (en yeni once).
    Arama: fatura numarasi veya musteri adi icinde.
    Dondurur: (fatura_listesi, toplam_sayi)
    """
    term = (search or "").strip().lower()

    def matches(record: dict[str, Any]) -> bool:
        if payment_status and record.get("payment_status") != payment_status:
            return False
        if customer_id and record.get("customer_id") != customer_id:
            return False
        if term:
            haystack = " ".join([
                record.get("invoice_number") or "",
                (record.get("customer") or {}).get("name") or "",
            ]).lower()
            return term in haystack
        return True

    invoices = store.read_filtered_documents(COLLECTION, matches)
    invoices.sort(key=lambda r: r.get("created_at") or "", reverse=True)

    total = len(invoices)
    offset = (page - 1) * size
    return invoices[offset:offset + size], total


def invoice_list_item(record: dict[str, Any]) -> dict[str, Any]:
    """Liste satiri: kalemler ve kopyalar olmadan."""
    return {
        "id": record["id"],
        "invoice_number": record.get("invoice_number"),
        "invoice_date": record.get("invoice_date"),
        "due_date": record.get("due_date"),
        "customer_id": record.get("customer_id"),
        "customer_name": (record.get("customer") or {}).get("name") or "",
        "payment_status": record.get("payment_status"),
        "total_amount": record.get("total_amount"),
        "due_amount": record.get("due_amount"),
        "created_at": record.get("created_at"),
    }


def get_invoice(store: DocumentStore, invoice_id: uuid.UUID | str) -> dict[str, Any]:
    invoice = store.get_document(COLLECTION, invoice_id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Fatura bulunamadi")
    return invoice


def delete_invoice(store: DocumentStore, invoice_id: uuid.UUID | str) -> None:
    invoice = get_invoice(store, invoice_id)
    store.delete_document(COLLECTION, invoice["id"])
    logger.info("Fatura '%s' silindi", invoice.get("invoice_number"))


def get_invoice_stats(store: DocumentStore) -> dict[str, Any]:
    """Fatura istatistikleri: adet, ciro, tahsil edilen, kalan borc."""
    invoices = store.read_all_documents(COLLECTION)
    zero = Decimal("0")

    def amount(record: dict[str, Any], field: str) -> Decimal:
        return to_decimal(record.get(field)) or zero

    by_status: dict[str, int] = {}
    for invoice in invoices:
        key = invoice.get("payment_status", "Due")
        by_status[key] = by_status.get(key, 0) + 1

    return {
        "total_count": len(invoices),
        "total_revenue": sum((amount(i, "total_amount") for i in invoices), zero),
        "paid_total": sum((amount(i, "amount_paid") for i in invoices), zero),
        "outstanding_total": sum((amount(i, "due_amount") for i in invoices), zero),
        "by_status": by_status,
    }


def invoice_csv_rows(invoices: list[dict[str, Any]]) -> list[list[Any]]:
    return [
        [
            invoice.get("invoice_number"),
            (invoice.get("customer") or {}).get("name"),
            invoice.get("invoice_date"),
            invoice.get("due_date"),
            invoice.get("payment_status"),
            invoice.get("subtotal"),
            invoice.get("tax_amount"),
            invoice.get("total_amount"),
            invoice.get("amount_paid"),
            invoice.get("due_amount"),
        ]
        for invoice in invoices
    ]


def export_invoices_csv(
    store: DocumentStore, search: str | None = None, payment_status: str | None = None
):
    """Filtrelenmis faturalarin tamamini CSV olarak indir."""
    invoices, _ = get_invoices(store, search=search, payment_status=payment_status, size=100000)
    return csv_response("invoices", INVOICE_CSV_HEADERS, invoice_csv_rows(invoices))
