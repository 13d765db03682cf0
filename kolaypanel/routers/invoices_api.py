"""
Fatura REST API Router'i.

Taslak islemleri sunucuda saklanmaz: istemci guncel taslagi her istekle
gonderir, sunucu islemi uygulayip yeni taslagi ve toplamlari dondurur.
Kayit sadece POST / ile, tek bir yazma olarak yapilir.

Endpoint'ler:
    POST   /draft                    -> Yeni bos taslak
    POST   /draft/items              -> Kalem ekle
    POST   /draft/items/remove       -> Kalem sil
    POST   /draft/items/type         -> Kalem tipini degistir (kalem sifirlanir)
    POST   /draft/items/select       -> Kaleme urun/hizmet sec
    POST   /draft/items/quantity     -> Miktar degistir
    POST   /draft/items/price        -> Birim fiyat degistir
    POST   /draft/items/description  -> Aciklama degistir
    POST   /draft/items/options      -> Kalem icin secilebilir katalog kayitlari
    POST   /draft/amount-paid        -> Odenen tutar
    POST   /draft/preview            -> Onizleme (toplamlar + dogrulama hatalari)
    POST   /                         -> Faturayi kaydet
    GET    /                         -> Fatura listesi
    GET    /stats                    -> Fatura istatistikleri
    GET    /export                   -> CSV indir
    GET    /{invoice_id}             -> Fatura detay
    DELETE /{invoice_id}             -> Fatura sil
"""

import uuid

from fastapi import APIRouter, Query, Request, status

from kolaypanel.dependencies import ContextDep, StoreDep
from kolaypanel.rate_limit import INVOICE_SUBMIT_LIMIT, limiter
from kolaypanel.schemas.invoice import (
    AmountPaidRequest,
    CatalogOptionsRequest,
    CatalogSelectionRequest,
    DraftRequest,
    DraftResponse,
    InvoiceDraft,
    InvoiceListResponse,
    InvoiceResponse,
    ItemAddRequest,
    ItemIndexRequest,
    ItemTypeChangeRequest,
    ItemValueRequest,
    PreviewResponse,
)
from kolaypanel.services import invoice as invoice_service
from kolaypanel.services import invoice_draft as draft_service
from kolaypanel.services.catalog import CatalogEntry, available_entries, load_catalog
from kolaypanel.services.totals import calculate_totals, format_totals

router = APIRouter()


def _draft_response(draft: InvoiceDraft) -> DraftResponse:
    totals = calculate_totals(
        draft.items,
        draft.tax_rate_percent,
        draft.payment_status,
        draft.payment_type,
        draft.amount_paid,
    )
    return DraftResponse(draft=draft, totals=totals, formatted=format_totals(totals))


# ============================================================
# Taslak islemleri
# ============================================================

@router.post("/draft", response_model=DraftResponse)
def new_draft(ctx: ContextDep):
    """Varsayilan degerlerle yeni taslak: bugunun tarihi, tek bos urun kalemi."""
    return _draft_response(draft_service.new_draft())


@router.post("/draft/items", response_model=DraftResponse)
def add_item(data: ItemAddRequest, ctx: ContextDep):
    return _draft_response(draft_service.add_item(data.draft, data.type))


@router.post("/draft/items/remove", response_model=DraftResponse)
def remove_item(data: ItemIndexRequest, ctx: ContextDep):
    return _draft_response(draft_service.remove_item(data.draft, data.index))


@router.post("/draft/items/type", response_model=DraftResponse)
def change_item_type(data: ItemTypeChangeRequest, ctx: ContextDep):
    """Tip degisince kalemin secimi, aciklamasi, miktari ve fiyati sifirlanir."""
    return _draft_response(draft_service.set_item_type(data.draft, data.index, data.type))


@router.post("/draft/items/select", response_model=DraftResponse)
def select_entry(data: CatalogSelectionRequest, store: StoreDep):
    """
    Kaleme katalogdan urun/hizmet sec.
    Ayni kayit ayni tipte baska bir kalemde seciliyse 409 doner.
    """
    draft = draft_service.select_catalog_entry(
        data.draft, data.index, data.catalog_id, load_catalog(store)
    )
    return _draft_response(draft)


@router.post("/draft/items/quantity", response_model=DraftResponse)
def set_quantity(data: ItemValueRequest, ctx: ContextDep):
    return _draft_response(draft_service.set_quantity(data.draft, data.index, data.value))


@router.post("/draft/items/price", response_model=DraftResponse)
def set_price(data: ItemValueRequest, ctx: ContextDep):
    return _draft_response(draft_service.set_unit_price(data.draft, data.index, data.value))


@router.post("/draft/items/description", response_model=DraftResponse)
def set_description(data: ItemValueRequest, ctx: ContextDep):
    return _draft_response(draft_service.set_description(data.draft, data.index, data.value))


@router.post("/draft/items/options", response_model=list[CatalogEntry])
def item_options(data: CatalogOptionsRequest, store: StoreDep):
    """Bu kalem icin secilebilir kayitlar (diger kalemlerde secilenler haric)."""
    return available_entries(load_catalog(store), data.draft.items, data.type, data.index)


@router.post("/draft/amount-paid", response_model=DraftResponse)
def set_amount_paid(data: AmountPaidRequest, ctx: ContextDep):
    """Odenen tutar 0 ile genel toplam arasina cekilir."""
    return _draft_response(draft_service.set_amount_paid(data.draft, data.value))


@router.post("/draft/preview", response_model=PreviewResponse)
def preview(data: DraftRequest, store: StoreDep):
    """Kaydetmeden dogrula. Hatalar alan bazinda toplu doner."""
    totals, errors = invoice_service.preview_invoice(store, data.draft)
    return PreviewResponse(
        draft=data.draft,
        totals=totals,
        formatted=format_totals(totals),
        errors=errors,
        is_valid=not errors,
    )


# ============================================================
# Kaydedilmis faturalar
# ============================================================

@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(INVOICE_SUBMIT_LIMIT)
def submit_invoice(
    request: Request,
    data: DraftRequest,
    store: StoreDep,
    ctx: ContextDep,
):
    """
    Taslagi dogrula ve kaydet.

    - Dogrulama hatasi: 422, tum alan hatalari birlikte
    - Kayit hatasi: 503, taslak degismeden tekrar gonderilebilir
    - Taslak zaten gonderiliyor/kaydedilmis: 409
    """
    return invoice_service.submit_invoice(store, data.draft, ctx)


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    store: StoreDep,
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit sayisi"),
    search: str | None = Query(default=None, description="Fatura numarasi veya musteri adi"),
    payment_status: str | None = Query(default=None, description="Odeme durumu (Paid/Due)"),
    customer_id: str | None = Query(default=None, description="Musteriye gore filtrele"),
):
    """
    Fatura listesi (en yeni once).

    Ornek:
        GET /api/v1/invoices?page=1&size=10&payment_status=Due
    """
    invoices, total = invoice_service.get_invoices(
        store,
        search=search,
        payment_status=payment_status,
        customer_id=customer_id,
        page=page,
        size=size,
    )
    return InvoiceListResponse(
        items=[invoice_service.invoice_list_item(i) for i in invoices],
        total=total,
        page=page,
        size=size,
    )


@router.get("/stats")
def invoice_stats(store: StoreDep):
    """Fatura adedi, ciro, tahsil edilen ve kalan tutarlar."""
    return invoice_service.get_invoice_stats(store)


@router.get("/export")
def export_invoices(
    store: StoreDep,
    search: str | None = Query(default=None),
    payment_status: str | None = Query(default=None),
):
    """Filtrelenmis faturalari CSV olarak indir."""
    return invoice_service.export_invoices_csv(store, search=search, payment_status=payment_status)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: uuid.UUID, store: StoreDep):
    return invoice_service.get_invoice(store, invoice_id)


@router.delete("/{invoice_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_invoice(invoice_id: uuid.UUID, store: StoreDep):
    invoice_service.delete_invoice(store, invoice_id)
