import time
import uuid
import random
import string
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from kolaypanel.config import settings

ITEM_TYPES = ("product", "service", "custom")
PAYMENT_STATUSES = ("Paid", "Due")
PAYMENT_TYPES = ("all", "custom")
# Taslak durumlari: editing -> previewing (opsiyonel) -> submitting -> persisted
DRAFT_STATES = ("editing", "previewing", "submitting", "persisted")

# Kimlik (UPI ID) girilmesini zorunlu kilan odeme yontemi
UPI_PAYMENT_METHOD = "Upi"


# --- Sayi donusumleri ---
# Formdan gelen deger hatali olsa bile kalem her zaman gosterilebilir kalmali:
# gecersiz girdi reddedilmez, en yakin gecerli sinira cekilir.

def to_decimal(value: Any) -> Decimal | None:
    """Sayiya cevrilebiliyorsa Decimal, degilse None (NaN ve sonsuz dahil)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def coerce_quantity(value: Any) -> int:
    """Miktar: tam sayiya kesilir, gecersiz veya 1'den kucukse 1 olur."""
    number = to_decimal(value)
    if number is None:
        return 1
    return max(int(number), 1)


def coerce_price(value: Any) -> Decimal:
    """Birim fiyat: gecersiz veya negatifse 0 olur."""
    number = to_decimal(value)
    if number is None or number < 0:
        return Decimal("0")
    return number


def generate_invoice_number() -> str:
    """
    Benzersiz fatura numarasi.
    Format: INV-<milisaniye>-<6 karakter> (ornek: INV-1760000000000-7KQ2ZD)
    """
    timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(string.ascii_uppercase + string.digits, k=6))
    return f"INV-{timestamp}-{suffix}"


class LineItem(BaseModel):
    """
    Fatura kalemi (taslak halinde).
    line_total disaridan atanamaz, her zaman quantity x unit_price olarak hesaplanir.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    type: str = Field(default="product", pattern="^(product|service|custom)$")
    product_id: str | None = None
    service_id: str | None = None
    description: str = Field(default="", max_length=500)
    quantity: int = 1
    unit_price: Decimal = Decimal("0")
    line_total: Decimal = Decimal("0")

    @field_validator("quantity", mode="before")
    @classmethod
    def _coerce_quantity(cls, value: Any) -> int:
        return coerce_quantity(value)

    @field_validator("unit_price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Any) -> Decimal:
        return coerce_price(value)

    @field_validator("line_total", mode="before")
    @classmethod
    def _ignore_line_total(cls, value: Any) -> Decimal:
        return Decimal("0")

    @model_validator(mode="after")
    def _sync_derived(self) -> "LineItem":
        # Referans sadece kalem tipiyle eslesiyorsa tutulur
        if self.type != "product":
            self.product_id = None
        if self.type != "service":
            self.service_id = None
        self.recompute()
        return self

    def recompute(self) -> None:
        self.line_total = Decimal(self.quantity) * self.unit_price

    @property
    def catalog_id(self) -> str | None:
        """Kalemin bagli oldugu katalog kaydi (urun veya hizmet)."""
        if self.type == "product":
            return self.product_id
        if self.type == "service":
            return self.service_id
        return None


class InvoiceDraft(BaseModel):
    """
    Fatura formunun tamami.
    Kaydedilene kadar sadece istemcide/istekte yasar, kismi kayit yapilmaz.
    """
    invoice_number: str = Field(default_factory=generate_invoice_number, min_length=1, max_length=50)
    invoice_date: date | None = Field(default_factory=date.today)
    due_date: date | None = Field(default_factory=date.today)
    customer_id: str | None = None
    biller_id: str | None = None
    payment_method: str = Field(default="Cash", max_length=50)
    upi_id: str | None = None
    payment_status: str = Field(default="Due", pattern="^(Paid|Due)$")
    payment_type: str = Field(default="all", pattern="^(all|custom)$")
    amount_paid: Decimal | None = None
    tax_rate_percent: Decimal = Field(
        default_factory=lambda: Decimal(settings.DEFAULT_TAX_RATE), ge=0, le=100
    )
    notes: str | None = None
    items: list[LineItem] = Field(default_factory=lambda: [LineItem()])
    state: str = Field(default="editing", pattern="^(editing|previewing|submitting|persisted)$")

    @field_validator("amount_paid", mode="before")
    @classmethod
    def _coerce_amount_paid(cls, value: Any) -> Decimal | None:
        if value is None or value == "":
            return None
        number = to_decimal(value)
        if number is None:
            return None
        return max(number, Decimal("0"))


class InvoiceTotals(BaseModel):
    """Toplamlar motorunun ciktisi."""
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    amount_paid: Decimal
    due_amount: Decimal


# --- Taslak islemleri (istek govdeleri) ---

class DraftRequest(BaseModel):
    draft: InvoiceDraft


class ItemAddRequest(DraftRequest):
    type: str = Field(default="product", pattern="^(product|service|custom)$")


class ItemIndexRequest(DraftRequest):
    index: int = Field(ge=0)


class ItemTypeChangeRequest(ItemIndexRequest):
    type: str = Field(pattern="^(product|service|custom)$")


class CatalogSelectionRequest(ItemIndexRequest):
    catalog_id: str = Field(min_length=1)


class ItemValueRequest(ItemIndexRequest):
    """Miktar/fiyat/aciklama degisikligi. Deger ham haliyle gelir, servis donusturur."""
    value: Any = None


class AmountPaidRequest(DraftRequest):
    value: Any = None


class CatalogOptionsRequest(ItemIndexRequest):
    type: str = Field(pattern="^(product|service)$")


class DraftResponse(BaseModel):
    """Guncel taslak + hesaplanmis toplamlar (ekranda gosterilecek format dahil)."""
    draft: InvoiceDraft
    totals: InvoiceTotals
    formatted: dict[str, str]


class PreviewResponse(DraftResponse):
    errors: dict[str, list[str]]
    is_valid: bool


# --- Kaydedilmis fatura ---

class InvoiceItemResponse(BaseModel):
    id: str
    type: str
    product_id: str | None = None
    service_id: str | None = None
    description: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class InvoiceResponse(BaseModel):
    """
    Kaydedilmis fatura.
    customer ve biller alanlari kayit anindaki kopyalardir, sonradan degismez.
    """
    id: str
    invoice_number: str
    invoice_date: date
    due_date: date
    customer_id: str
    customer: dict[str, Any]
    biller_id: str
    biller: dict[str, Any]
    payment_method: str
    upi_id: str | None = None
    payment_status: str
    payment_type: str
    amount_paid: Decimal
    due_amount: Decimal
    tax_rate_percent: Decimal
    notes: str | None = None
    items: list[InvoiceItemResponse]
    subtotal: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    created_by: str | None = None


class InvoiceListItem(BaseModel):
    """Fatura listesi icin kisaltilmis model (kalemler dahil edilmez)."""
    id: str
    invoice_number: str
    invoice_date: date
    due_date: date
    customer_id: str
    customer_name: str
    payment_status: str
    total_amount: Decimal
    due_amount: Decimal
    created_at: datetime


class InvoiceListResponse(BaseModel):
    """Fatura listesi (sayfalama destekli)."""
    items: list[InvoiceListItem]
    total: int
    page: int
    size: int

    model_config = ConfigDict(from_attributes=True)
