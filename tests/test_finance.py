"""
KolayPanel - Gelir, Gider ve Kar Analizi Testleri
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest
from fastapi import HTTPException

from kolaypanel.schemas.finance import ExpenseCreate, IncomeCreate
from kolaypanel.services import finance as finance_service

FINANCE_URL = "/api/v1/finance"


def _income(store, amount, on, source="Satis", category="sales"):
    return finance_service.create_income(
        store, IncomeCreate(amount=amount, source=source, category=category, date=on)
    )


def _expense(store, amount, on, category="rent", payee="Ev Sahibi"):
    return finance_service.create_expense(
        store,
        ExpenseCreate(amount=amount, payee=payee, category=category, date=on, payment_method="Bank"),
    )


class TestPeriods:

    def test_period_start(self):
        today = date(2026, 3, 31)
        assert finance_service.period_start("all", today) is None
        assert finance_service.period_start("today", today) == today
        assert finance_service.period_start("week", today) == date(2026, 3, 24)
        assert finance_service.period_start("month", today) == date(2026, 2, 28)
        assert finance_service.period_start("year", today) == date(2025, 3, 31)

    def test_invalid_period(self):
        with pytest.raises(HTTPException) as exc:
            finance_service.period_start("decade")
        assert exc.value.status_code == 400

    def test_filter_by_period(self, store):
        today = date.today()
        _income(store, "100", today)
        _income(store, "200", today - timedelta(days=3))
        _income(store, "300", today - timedelta(days=40))

        assert len(finance_service.get_income(store, "today")) == 1
        assert len(finance_service.get_income(store, "week")) == 2
        week_total = finance_service.total_amount(finance_service.get_income(store, "week"))
        assert week_total == Decimal("300.00")
        assert len(finance_service.get_income(store, "all")) == 3


class TestIncomeExpenseAPI:

    def test_amount_must_be_positive(self, client, auth_headers):
        response = client.post(
            f"{FINANCE_URL}/income",
            json={"amount": "0", "source": "X", "category": "sales", "date": "2026-01-01"},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_list_with_search_and_total(self, client, auth_headers, store):
        _expense(store, "1500", date.today(), category="rent", payee="Ev Sahibi")
        _expense(store, "250.50", date.today(), category="utilities", payee="Elektrik Sirketi")

        data = client.get(f"{FINANCE_URL}/expenses", params={"search": "elektrik"}, headers=auth_headers).json()
        assert data["count"] == 1
        assert Decimal(data["total_amount"]) == Decimal("250.50")

        everything = client.get(f"{FINANCE_URL}/expenses", headers=auth_headers).json()
        assert Decimal(everything["total_amount"]) == Decimal("1750.50")

    def test_delete_income(self, client, auth_headers, store):
        income = _income(store, "100", date.today())
        assert client.delete(f"{FINANCE_URL}/income/{income['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"{FINANCE_URL}/income/{income['id']}", headers=auth_headers).status_code == 404

    def test_export_income(self, client, auth_headers, store):
        _income(store, "100", date(2026, 2, 1), source="Dukkan")
        response = client.get(f"{FINANCE_URL}/income/export", headers=auth_headers)
        lines = response.text.strip().split("\n")
        assert lines[0] == '"Date","Source","Category","Amount","Description"'
        assert lines[1] == '"2026-02-01","Dukkan","sales","100",""'


class TestProfitAnalysis:

    def test_profit(self, store):
        on = date(2026, 3, 10)
        _income(store, "10000", on)
        _expense(store, "3000", on, category="rent")
        _expense(store, "1000", on, category="taxes")
        # Aralik disi
        _expense(store, "999", date(2026, 5, 1))

        analysis = finance_service.profit_analysis(store, date(2026, 3, 1), date(2026, 3, 31))
        assert analysis["total_income"] == Decimal("10000.00")
        assert analysis["total_expenses"] == Decimal("4000.00")
        assert analysis["gross_profit"] == Decimal("6000.00")
        assert analysis["operating_expenses"] == Decimal("3000.00")
        assert analysis["net_profit"] == Decimal("3000.00")
        assert analysis["profit_margin"] == Decimal("30.00")
        assert analysis["expenses_by_category"] == {"rent": Decimal("3000"), "taxes": Decimal("1000")}

    def test_margin_zero_without_income(self, store):
        _expense(store, "100", date(2026, 3, 10))
        analysis = finance_service.profit_analysis(store, date(2026, 3, 1), date(2026, 3, 31))
        assert analysis["profit_margin"] == Decimal("0")

    def test_invalid_range(self, client, auth_headers):
        response = client.get(
            f"{FINANCE_URL}/profit", params={"start": "2026-03-31", "end": "2026-03-01"}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_profit_export(self, client, auth_headers, store):
        _income(store, "500", date(2026, 3, 10))
        response = client.get(
            f"{FINANCE_URL}/profit/export", params={"start": "2026-03-01", "end": "2026-03-31"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert '"Net Profit","500.00"' in response.text
