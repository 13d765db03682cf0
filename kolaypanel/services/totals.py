"""
Fatura toplamlari.

Saf fonksiyonlar: ara toplam, vergi, genel toplam ve odeme durumuna gore
kalan borc. Hesaplar yuvarlanmamis Decimal ile yapilir; yuvarlama sadece
kayit asamasinda (round_money) uygulanir.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from kolaypanel.config import settings
from kolaypanel.schemas.invoice import InvoiceTotals, LineItem, to_decimal

ZERO = Decimal("0")
CENT = Decimal("0.01")


def calculate_subtotal(items: Iterable[LineItem]) -> Decimal:
    """Kalem toplamlarinin toplami. Sayi olmayan kalem 0 sayilir."""
    subtotal = ZERO
    for item in items:
        line_total = to_decimal(item.line_total)
        subtotal += line_total if line_total is not None else ZERO
    return subtotal


def calculate_tax(subtotal: Decimal, tax_rate_percent: Decimal) -> Decimal:
    return subtotal * Decimal(tax_rate_percent) / Decimal(100)


def resolve_payment(
    total_amount: Decimal,
    payment_status: str,
    payment_type: str,
    amount_paid: Decimal | None,
) -> tuple[Decimal, Decimal]:
    """
    Odenen ve kalan tutari belirle.
    Dondurur: (odenen, kalan)

    - Due: odenen girisi dikkate alinmaz, kalan = toplam
    - Paid + all: tamami odenmis, kalan = 0
    - Paid + custom: odenen [0, toplam] araligina cekilir
    """
    if payment_status != "Paid":
        return ZERO, total_amount
    if payment_type != "custom":
        return total_amount, ZERO

    paid = to_decimal(amount_paid)
    if paid is None or paid < 0:
        paid = ZERO
    paid = min(paid, total_amount)
    return paid, max(ZERO, total_amount - paid)


def calculate_totals(
    items: Iterable[LineItem],
    tax_rate_percent: Decimal,
    payment_status: str = "Due",
    payment_type: str = "all",
    amount_paid: Decimal | None = None,
) -> InvoiceTotals:
    subtotal = calculate_subtotal(items)
    tax_amount = calculate_tax(subtotal, tax_rate_percent)
    total_amount = subtotal + tax_amount
    paid, due = resolve_payment(total_amount, payment_status, payment_type, amount_paid)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
        amount_paid=paid,
        due_amount=due,
    )


def round_money(amount: Decimal) -> Decimal:
    """Kurus hassasiyetine yuvarla (0.005 -> 0.01)."""
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def round_totals(totals: InvoiceTotals) -> InvoiceTotals:
    """
    Kayit icin yuvarlanmis toplamlar.
    Genel toplam, yuvarlanmis ara toplam + yuvarlanmis vergi olarak yeniden kurulur.
    """
    subtotal = round_money(totals.subtotal)
    tax_amount = round_money(totals.tax_amount)
    total_amount = subtotal + tax_amount
    if totals.due_amount <= 0:
        amount_paid = total_amount
    else:
        amount_paid = min(round_money(totals.amount_paid), total_amount)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
        amount_paid=amount_paid,
        due_amount=total_amount - amount_paid,
    )


def format_currency(amount: Decimal | float | int | None) -> str:
    """Ekranda gosterim: ₹1,234.50 (para birimi sembolu ayarlardan)."""
    value = to_decimal(amount)
    if value is None:
        value = ZERO
    sign = "-" if value < 0 else ""
    return f"{sign}{settings.CURRENCY_SYMBOL}{abs(round_money(value)):,.2f}"


def format_totals(totals: InvoiceTotals) -> dict[str, str]:
    return {
        "subtotal": format_currency(totals.subtotal),
        "tax_amount": format_currency(totals.tax_amount),
        "total_amount": format_currency(totals.total_amount),
        "amount_paid": format_currency(totals.amount_paid),
        "due_amount": format_currency(totals.due_amount),
    }
