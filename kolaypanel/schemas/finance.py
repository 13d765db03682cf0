import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

# Listeleme icin zaman filtresi
PERIODS = ("all", "today", "week", "month", "year")


# --- Gelir Schemalari ---

class IncomeCreate(BaseModel):
    """Yeni gelir kaydi"""
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    source: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    date: dt.date
    description: str = Field(default="", max_length=1000)


class IncomeResponse(IncomeCreate):
    id: str
    created_at: dt.datetime


class IncomeListResponse(BaseModel):
    items: list[IncomeResponse]
    count: int
    total_amount: Decimal


# --- Gider Schemalari ---

class ExpenseCreate(BaseModel):
    """Yeni gider kaydi"""
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payee: str = Field(min_length=1, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    date: dt.date
    description: str = Field(default="", max_length=1000)
    payment_method: str = Field(min_length=1, max_length=50)


class ExpenseResponse(ExpenseCreate):
    id: str
    created_at: dt.datetime


class ExpenseListResponse(BaseModel):
    items: list[ExpenseResponse]
    count: int
    total_amount: Decimal


# --- Kar Analizi ---

class ProfitAnalysis(BaseModel):
    total_income: Decimal
    total_expenses: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    period_start: dt.date
    period_end: dt.date
    expenses_by_category: dict[str, Decimal]
