from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

_money = dict(ge=0, max_digits=12, decimal_places=2)


# --- Personel Maaslari ---

class Allowances(BaseModel):
    """Ek odemeler (bos birakilanlar 0 sayilir)"""
    housing: Decimal = Field(default=Decimal("0"), **_money)
    transport: Decimal = Field(default=Decimal("0"), **_money)
    medical: Decimal = Field(default=Decimal("0"), **_money)
    other: Decimal = Field(default=Decimal("0"), **_money)


class SalaryDeductions(BaseModel):
    tax: Decimal = Field(default=Decimal("0"), **_money)
    insurance: Decimal = Field(default=Decimal("0"), **_money)
    pension: Decimal = Field(default=Decimal("0"), **_money)
    other: Decimal = Field(default=Decimal("0"), **_money)


class SalaryCreate(BaseModel):
    employee_id: str = Field(min_length=1, max_length=50)
    employee_name: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=100)
    department: str = Field(min_length=1, max_length=100)
    base_salary: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    allowances: Allowances = Allowances()
    deductions: SalaryDeductions = SalaryDeductions()
    effective_date: date


class SalaryResponse(SalaryCreate):
    id: str
    net_salary: Decimal
    created_at: datetime


# --- Bordro Odemeleri ---

class PayrollDeductions(BaseModel):
    tax: Decimal = Field(default=Decimal("0"), **_money)
    insurance: Decimal = Field(default=Decimal("0"), **_money)
    other: Decimal = Field(default=Decimal("0"), **_money)


class PayrollCreate(BaseModel):
    employee_id: str = Field(min_length=1, max_length=50)
    employee_name: str = Field(min_length=1, max_length=255)
    salary: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    payment_date: date
    status: str = Field(default="pending", pattern="^(pending|paid|failed)$")
    deductions: PayrollDeductions = PayrollDeductions()


class PayrollResponse(PayrollCreate):
    id: str
    net_pay: Decimal
    created_at: datetime


class PayrollSummary(BaseModel):
    total_payroll: Decimal
    total_deductions: Decimal
    total_net_pay: Decimal
    pending_payments: int
    paid_payments: int
    failed_payments: int


class PayrollReport(BaseModel):
    period_start: date
    period_end: date
    summary: PayrollSummary
    records: list[PayrollResponse]
