"""
Maas ve bordro islemleri.

- staff-salaries: personelin maas tanimi (temel maas + ek odemeler - kesintiler)
- payroll: donemsel maas odemeleri (pending / paid / failed)
"""

import uuid
import logging
from datetime import date
from decimal import Decimal
from typing import Any

from kolaypanel.schemas.invoice import to_decimal
from kolaypanel.schemas.payroll import PayrollCreate, SalaryCreate
from kolaypanel.services.documents import DocumentStore, require_document
from kolaypanel.services.export import csv_response
from kolaypanel.services.totals import round_money

logger = logging.getLogger(__name__)

SALARIES = "staff-salaries"
PAYROLL = "payroll"

SALARY_CSV_HEADERS = [
    "Employee ID", "Employee Name", "Position", "Department", "Base Salary",
    "Total Allowances", "Total Deductions", "Net Salary", "Effective Date",
]
PAYROLL_CSV_HEADERS = [
    "Employee ID", "Employee Name", "Salary", "Deductions", "Net Pay",
    "Payment Date", "Status",
]

ZERO = Decimal("0")


def _sum(values: dict[str, Any] | None) -> Decimal:
    return sum((to_decimal(v) or ZERO for v in (values or {}).values()), ZERO)


# --- Personel Maaslari ---

def calculate_net_salary(base_salary: Decimal, allowances: dict, deductions: dict) -> Decimal:
    """net = temel maas + toplam ek odeme - toplam kesinti"""
    return round_money(base_salary + _sum(allowances) - _sum(deductions))


def get_salaries(store: DocumentStore, search: str | None = None) -> list[dict[str, Any]]:
    term = (search or "").strip().lower()
    return store.read_filtered_documents(
        SALARIES,
        lambda r: not term or any(
            term in (r.get(f) or "").lower()
            for f in ("employee_name", "employee_id", "position", "department")
        ),
    )


def get_salary(store: DocumentStore, salary_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, SALARIES, salary_id, "Maas kaydi bulunamadi")


def create_salary(store: DocumentStore, data: SalaryCreate) -> dict[str, Any]:
    record = data.model_dump(mode="json")
    record["net_salary"] = str(
        calculate_net_salary(data.base_salary, record["allowances"], record["deductions"])
    )
    salary_id = store.create_document(SALARIES, record)
    logger.info("Maas kaydi eklendi: %s", data.employee_name)
    return get_salary(store, salary_id)


def delete_salary(store: DocumentStore, salary_id: uuid.UUID | str) -> None:
    salary = get_salary(store, salary_id)
    store.delete_document(SALARIES, salary["id"])


def export_salaries_csv(store: DocumentStore, search: str | None = None):
    rows = [
        [
            s.get("employee_id"), s.get("employee_name"), s.get("position"),
            s.get("department"), s.get("base_salary"),
            str(_sum(s.get("allowances"))), str(_sum(s.get("deductions"))),
            s.get("net_salary"), s.get("effective_date"),
        ]
        for s in get_salaries(store, search)
    ]
    return csv_response("staff_salaries", SALARY_CSV_HEADERS, rows)


# --- Bordro Odemeleri ---

def calculate_net_pay(salary: Decimal, deductions: dict) -> Decimal:
    return round_money(salary - _sum(deductions))


def get_payroll_records(
    store: DocumentStore,
    start: date | None = None,
    end: date | None = None,
    payment_status: str | None = None,
) -> list[dict[str, Any]]:
    """Odeme tarihine gore filtrelenmis bordro kayitlari (tarihe gore sirali)."""

    def matches(record: dict[str, Any]) -> bool:
        if payment_status and record.get("status") != payment_status:
            return False
        paid_on = date.fromisoformat(record["payment_date"])
        if start and paid_on < start:
            return False
        if end and paid_on > end:
            return False
        return True

    records = store.read_filtered_documents(PAYROLL, matches)
    return sorted(records, key=lambda r: r["payment_date"])


def get_payroll(store: DocumentStore, payroll_id: uuid.UUID | str) -> dict[str, Any]:
    return require_document(store, PAYROLL, payroll_id, "Bordro kaydi bulunamadi")


def create_payroll(store: DocumentStore, data: PayrollCreate) -> dict[str, Any]:
    record = data.model_dump(mode="json")
    record["net_pay"] = str(calculate_net_pay(data.salary, record["deductions"]))
    payroll_id = store.create_document(PAYROLL, record)
    logger.info("Bordro odemesi eklendi: %s (%s)", data.employee_name, data.status)
    return get_payroll(store, payroll_id)


def update_payroll_status(
    store: DocumentStore, payroll_id: uuid.UUID | str, new_status: str
) -> dict[str, Any]:
    payroll = get_payroll(store, payroll_id)
    return store.update_document(PAYROLL, payroll["id"], {"status": new_status})


def delete_payroll(store: DocumentStore, payroll_id: uuid.UUID | str) -> None:
    payroll = get_payroll(store, payroll_id)
    store.delete_document(PAYROLL, payroll["id"])


def payroll_report(store: DocumentStore, start: date, end: date) -> dict[str, Any]:
    """
    Donem raporu: toplam bordro, toplam kesinti, toplam net odeme ve
    duruma gore odeme sayilari.
    """
    records = get_payroll_records(store, start, end)
    total_payroll = sum((to_decimal(r.get("salary")) or ZERO for r in records), ZERO)
    total_deductions = sum((_sum(r.get("deductions")) for r in records), ZERO)
    total_net = sum((to_decimal(r.get("net_pay")) or ZERO for r in records), ZERO)

    def count(value: str) -> int:
        return sum(1 for r in records if r.get("status") == value)

    return {
        "period_start": start,
        "period_end": end,
        "summary": {
            "total_payroll": round_money(total_payroll),
            "total_deductions": round_money(total_deductions),
            "total_net_pay": round_money(total_net),
            "pending_payments": count("pending"),
            "paid_payments": count("paid"),
            "failed_payments": count("failed"),
        },
        "records": records,
    }


def export_payroll_csv(store: DocumentStore, start: date | None = None, end: date | None = None):
    rows = [
        [
            r.get("employee_id"), r.get("employee_name"), r.get("salary"),
            str(_sum(r.get("deductions"))), r.get("net_pay"),
            r.get("payment_date"), r.get("status"),
        ]
        for r in get_payroll_records(store, start, end)
    ]
    return csv_response("payroll", PAYROLL_CSV_HEADERS, rows)
