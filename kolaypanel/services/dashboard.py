from datetime import date
from decimal import Decimal
from typing import Any

from kolaypanel.schemas.invoice import to_decimal
from kolaypanel.services.documents import DocumentStore
from kolaypanel.services.invoice import invoice_list_item
from kolaypanel.services.totals import round_money

ZERO = Decimal("0")


def sales_by_month(invoices: list[dict[str, Any]], year: int) -> list[dict[str, Any]]:
    """Verilen yilin 12 ayi icin fatura toplamlari (fatura tarihine gore)."""
    buckets = [ZERO] * 12
    for invoice in invoices:
        invoice_date = date.fromisoformat(invoice["invoice_date"])
        if invoice_date.year == year:
            buckets[invoice_date.month - 1] += to_decimal(invoice.get("total_amount")) or ZERO
    return [{"month": i + 1, "total": round_money(total)} for i, total in enumerate(buckets)]


def get_dashboard(store: DocumentStore, today: date | None = None) -> dict[str, Any]:
    """
    Ana panel ozeti.
    Kar = toplam fatura tutari - toplam gider.
    """
    today = today or date.today()
    invoices = store.read_all_documents("invoices")
    expenses = store.read_all_documents("expenses")

    revenue = round_money(
        sum((to_decimal(i.get("total_amount")) or ZERO for i in invoices), ZERO)
    )
    expense_total = round_money(
        sum((to_decimal(e.get("amount")) or ZERO for e in expenses), ZERO)
    )
    recent = sorted(invoices, key=lambda i: i.get("created_at") or "", reverse=True)[:5]

    return {
        "customer_count": store.count_documents("customers"),
        "product_count": store.count_documents("products"),
        "service_count": store.count_documents("services"),
        "invoice_count": len(invoices),
        "revenue": revenue,
        "expenses": expense_total,
        "profit": revenue - expense_total,
        "sales_by_month": sales_by_month(invoices, today.year),
        "recent_invoices": [invoice_list_item(i) for i in recent],
    }
