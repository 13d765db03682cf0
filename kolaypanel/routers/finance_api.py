from datetime import date

from fastapi import APIRouter, Query, status

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.finance import (
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseResponse,
    IncomeCreate,
    IncomeListResponse,
    IncomeResponse,
    ProfitAnalysis,
)
from kolaypanel.services import finance as finance_service

router = APIRouter()

PERIOD_QUERY = Query(default="all", description="all/today/week/month/year")


# --- Gelirler ---

@router.get("/income", response_model=IncomeListResponse)
def list_income(
    store: StoreDep,
    period: str = PERIOD_QUERY,
    search: str | None = Query(default=None, description="Kaynak, kategori veya aciklama"),
):
    records = finance_service.get_income(store, period, search)
    return IncomeListResponse(
        items=records, count=len(records), total_amount=finance_service.total_amount(records)
    )


@router.post("/income", response_model=IncomeResponse, status_code=status.HTTP_201_CREATED)
def create_income(data: IncomeCreate, store: StoreDep):
    return finance_service.create_income(store, data)


@router.get("/income/export")
def export_income(store: StoreDep, period: str = PERIOD_QUERY, search: str | None = Query(default=None)):
    return finance_service.export_income_csv(store, period, search)


@router.delete("/income/{income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_income(income_id: str, store: StoreDep):
    finance_service.delete_income(store, income_id)


# --- Giderler ---

@router.get("/expenses", response_model=ExpenseListResponse)
def list_expenses(
    store: StoreDep,
    period: str = PERIOD_QUERY,
    search: str | None = Query(default=None, description="Alici, kategori veya aciklama"),
):
    records = finance_service.get_expenses(store, period, search)
    return ExpenseListResponse(
        items=records, count=len(records), total_amount=finance_service.total_amount(records)
    )


@router.post("/expenses", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
def create_expense(data: ExpenseCreate, store: StoreDep):
    return finance_service.create_expense(store, data)


@router.get("/expenses/export")
def export_expenses(store: StoreDep, period: str = PERIOD_QUERY, search: str | None = Query(default=None)):
    return finance_service.export_expenses_csv(store, period, search)


@router.delete("/expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_expense(expense_id: str, store: StoreDep):
    finance_service.delete_expense(store, expense_id)


# --- Kar analizi ---

@router.get("/profit", response_model=ProfitAnalysis)
def profit(store: StoreDep, start: date = Query(), end: date = Query()):
    """Tarih araligi icin brut/net kar ve kar marji."""
    return finance_service.profit_analysis(store, start, end)


@router.get("/profit/export")
def export_profit(store: StoreDep, start: date = Query(), end: date = Query()):
    return finance_service.export_profit_csv(store, start, end)
