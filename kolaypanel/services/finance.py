"""
Gelir, gider ve kar analizi.

Listeler zaman filtresiyle daraltilabilir:
    all   - tum kayitlar
    today - sadece bugun
    week  - son 7 gun
    month - son 1 ay
    year  - son 1 yil
"""

import uuid
import logging
from datetime import date
from decimal import Decimal
from typing import Any

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException, status

from kolaypanel.schemas.finance import PERIODS, ExpenseCreate, IncomeCreate
from kolaypanel.schemas.invoice import to_decimal
from kolaypanel.services.documents import DocumentStore, require_document
from kolaypanel.services.export import csv_response
from kolaypanel.services.totals import round_money

logger = logging.getLogger(__name__)

INCOME = "income"
EXPENSES = "expenses"

# Faaliyet gideri sayilmayan kategoriler
NON_OPERATING_CATEGORIES = ("taxes", "interest", "depreciation")

INCOME_CSV_HEADERS = ["Date", "Source", "Category", "Amount", "Description"]
EXPENSE_CSV_HEADERS = ["Date", "Payee", "Category", "Amount", "Payment Method", "Description"]
PROFIT_CSV_HEADERS = ["Metric", "Amount"]

ZERO = Decimal("0")


def period_start(period: str, today: date | None = None) -> date | None:
    """Filtrenin baslangic tarihi ('all' icin None)."""
    today = today or date.today()
    if period == "all":
        return None
    if period == "today":
        return today
    if period == "week":
        return today - relativedelta(weeks=1)
    if period == "month":
        return today - relativedelta(months=1)
    if period == "year":
        return today - relativedelta(years=1)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=f"Gecersiz donem. Gecerli degerler: {', '.join(PERIODS)}",
    )


def total_amount(records: list[dict[str, Any]]) -> Decimal:
    return round_money(sum((to_decimal(r.get("amount")) or ZERO for r in records), ZERO))


def _list(
    store: DocumentStore,
    collection: str,
    search_fields: tuple[str, ...],
    period: str = "all",
    search: str | None = None,
    today: date | None = None,
) -> list[dict[str, Any]]:
    start = period_start(period, today)
    term = (search or "").strip().lower()

    def matches(record: dict[str, Any]) -> bool:
        if start and date.fromisoformat(record["date"]) < start:
            return False
        if term:
            return any(term in (record.get(f) or "").lower() for f in search_fields)
        return True

    records = store.read_filtered_documents(collection, matches)
    # Yeniden eskiye
    return sorted(records, key=lambda r: r["date"], reverse=True)


# --- Gelirler ---

def get_income(
    store: DocumentStore, period: str = "all", search: str | None = None, today: date | None = None
) -> list[dict[str, Any]]:
    return _list(store, INCOME, ("source", "category", "description"), period, search, today)


def create_income(store: DocumentStore, data: IncomeCreate) -> dict[str, Any]:
    income_id = store.create_document(INCOME, data.model_dump(mode="json"))
    logger.info("Gelir eklendi: %s %s", data.source, data.amount)
    return store.get_document(INCOME, income_id)


def delete_income(store: DocumentStore, income_id: uuid.UUID | str) -> None:
    record = require_document(store, INCOME, income_id, "Gelir kaydi bulunamadi")
    store.delete_document(INCOME, record["id"])


def export_income_csv(store: DocumentStore, period: str = "all", search: str | None = None):
    rows = [
        [r.get("date"), r.get("source"), r.get("category"), r.get("amount"), r.get("description")]
        for r in get_income(store, period, search)
    ]
    return csv_response("income", INCOME_CSV_HEADERS, rows)


# --- Giderler ---

def get_expenses(
    store: DocumentStore, period: str = "all", search: str | None = None, today: date | None = None
) -> list[dict[str, Any]]:
    return _list(store, EXPENSES, ("payee", "category", "description"), period, search, today)


def create_expense(store: DocumentStore, data: ExpenseCreate) -> dict[str, Any]:
    expense_id = store.create_document(EXPENSES, data.model_dump(mode="json"))
    logger.info("Gider eklendi: %s %s", data.payee, data.amount)
    return store.get_document(EXPENSES, expense_id)


def delete_expense(store: DocumentStore, expense_id: uuid.UUID | str) -> None:
    record = require_document(store, EXPENSES, expense_id, "Gider kaydi bulunamadi")
    store.delete_document(EXPENSES, record["id"])


def export_expenses_csv(store: DocumentStore, period: str = "all", search: str | None = None):
    rows = [
        [
            r.get("date"), r.get("payee"), r.get("category"), r.get("amount"),
            r.get("payment_method"), r.get("description"),
        ]
        for r in get_expenses(store, period, search)
    ]
    return csv_response("expenses", EXPENSE_CSV_HEADERS, rows)


# --- Kar Analizi ---

def _in_range(record: dict[str, Any], start: date, end: date) -> bool:
    return start <= date.fromisoformat(record["date"]) <= end


def profit_analysis(store: DocumentStore, start: date, end: date) -> dict[str, Any]:
    """
    Tarih araligi icin kar analizi.

    brut kar      = toplam gelir - toplam gider
    faaliyet gid. = vergi, faiz ve amortisman disindaki giderler
    net kar       = brut kar - faaliyet giderleri
    kar marji     = net kar / toplam gelir * 100 (gelir yoksa 0)
    """
    if start > end:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Baslangic tarihi bitis tarihinden sonra olamaz",
        )
    income = store.read_filtered_documents(INCOME, lambda r: _in_range(r, start, end))
    expenses = store.read_filtered_documents(EXPENSES, lambda r: _in_range(r, start, end))

    total_income = total_amount(income)
    total_expenses = total_amount(expenses)
    gross_profit = total_income - total_expenses
    operating = total_amount(
        [e for e in expenses if (e.get("category") or "").lower() not in NON_OPERATING_CATEGORIES]
    )
    net_profit = gross_profit - operating
    margin = round_money(net_profit / total_income * 100) if total_income > 0 else ZERO

    by_category: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.get("category") or "other"
        by_category[key] = by_category.get(key, ZERO) + (to_decimal(expense.get("amount")) or ZERO)

    return {
        "total_income": total_income,
        "total_expenses": total_expenses,
        "gross_profit": gross_profit,
        "operating_expenses": operating,
        "net_profit": net_profit,
        "profit_margin": margin,
        "period_start": start,
        "period_end": end,
        "expenses_by_category": by_category,
    }


def export_profit_csv(store: DocumentStore, start: date, end: date):
    analysis = profit_analysis(store, start, end)
    rows = [
        ["Total Income", analysis["total_income"]],
        ["Total Expenses", analysis["total_expenses"]],
        ["Gross Profit", analysis["gross_profit"]],
        ["Operating Expenses", analysis["operating_expenses"]],
        ["Net Profit", analysis["net_profit"]],
        ["Profit Margin (%)", analysis["profit_margin"]],
    ]
    rows += [[f"Expense: {name}", amount] for name, amount in analysis["expenses_by_category"].items()]
    return csv_response("profit_analysis", PROFIT_CSV_HEADERS, rows)
