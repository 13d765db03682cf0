from decimal import Decimal

from pydantic import BaseModel

from kolaypanel.schemas.invoice import InvoiceListItem


class MonthlySales(BaseModel):
    month: int
    total: Decimal


class DashboardResponse(BaseModel):
    """Ana panel ozet verileri"""
    customer_count: int
    product_count: int
    service_count: int
    invoice_count: int
    revenue: Decimal
    expenses: Decimal
    profit: Decimal
    sales_by_month: list[MonthlySales]
    recent_invoices: list[InvoiceListItem]
