"""
KolayPanel - Fatura Kaydetme Testleri

Servis katmani (dogrulama + tek yazma ile kayit) ve REST API uzerinden
taslak -> kayit akisi.
"""

from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from kolaypanel.exceptions import DraftLockedError, InvoiceValidationError, PersistenceError
from kolaypanel.schemas.invoice import InvoiceDraft, LineItem
from kolaypanel.services import invoice as invoice_service
from kolaypanel.services import invoice_draft as draft_service
from kolaypanel.services.catalog import load_catalog


@pytest.fixture
def valid_draft(test_customer, test_biller, test_product):
    """2 x 100 urun, %18 vergi -> toplam 236"""
    return InvoiceDraft(
        customer_id=test_customer["id"],
        biller_id=test_biller["id"],
        items=[LineItem(type="product", product_id=test_product["id"], quantity=2, unit_price="100")],
        tax_rate_percent=18,
    )


class TestSubmitInvoice:
    """submit_invoice: dogrulama ve kayit."""

    def test_submit(self, store, ctx, valid_draft):
        invoice = invoice_service.submit_invoice(store, valid_draft, ctx)

        assert valid_draft.state == "persisted"
        assert invoice["subtotal"] == "200.00"
        assert invoice["tax_amount"] == "36.00"
        assert invoice["total_amount"] == "236.00"
        assert invoice["due_amount"] == "236.00"
        assert invoice["amount_paid"] == "0.00"
        assert invoice["customer"]["name"] == "Ahmet Yilmaz"
        assert invoice["biller"]["company"] == "Test Sirket A.S."
        assert invoice["created_by"] == str(ctx.user_id)
        assert store.count_documents("invoices") == 1

    def test_zero_items_rejected(self, store, ctx, valid_draft):
        """Kalemsiz fatura kaydedilmemeli."""
        valid_draft.items = []
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert "items" in exc.value.errors
        assert valid_draft.state == "editing"
        assert store.count_documents("invoices") == 0

    def test_all_errors_reported_together(self, store, ctx):
        draft = InvoiceDraft(payment_method="Upi", upi_id="  ")
        draft.items.append(LineItem(type="custom"))
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, draft, ctx)
        errors = exc.value.errors
        assert {"customer_id", "biller_id", "upi_id", "items.0", "items.1"} <= errors.keys()
        assert store.count_documents("invoices") == 0

    def test_unknown_customer(self, store, ctx, valid_draft):
        valid_draft.customer_id = "00000000-0000-0000-0000-000000000000"
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert "customer_id" in exc.value.errors

    def test_custom_payment_requires_amount(self, store, ctx, valid_draft):
        valid_draft.payment_status = "Paid"
        valid_draft.payment_type = "custom"
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert "amount_paid" in exc.value.errors

    def test_amount_paid_above_total_rejected(self, store, ctx, valid_draft):
        valid_draft.payment_status = "Paid"
        valid_draft.payment_type = "custom"
        valid_draft.amount_paid = Decimal("300")
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert "amount_paid" in exc.value.errors

    def test_partial_payment(self, store, ctx, valid_draft):
        valid_draft.payment_status = "Paid"
        valid_draft.payment_type = "custom"
        valid_draft.amount_paid = Decimal("100")
        invoice = invoice_service.submit_invoice(store, valid_draft, ctx)
        assert invoice["amount_paid"] == "100.00"
        assert invoice["due_amount"] == "136.00"

    def test_upi_id_only_kept_for_upi(self, store, ctx, valid_draft):
        valid_draft.upi_id = "ahmet@upi"
        invoice = invoice_service.submit_invoice(store, valid_draft, ctx)
        assert invoice["upi_id"] is None

    def test_persistence_failure_keeps_draft(self, store, ctx, valid_draft, monkeypatch):
        """Yazma hatasinda taslak korunmali ve tekrar gonderilebilmeli."""
        def _fail(collection, record):
            raise SQLAlchemyError("baglanti koptu")

        monkeypatch.setattr(store, "create_document", _fail)
        with pytest.raises(PersistenceError):
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert valid_draft.state == "editing"
        assert len(valid_draft.items) == 1

        monkeypatch.undo()
        invoice_service.submit_invoice(store, valid_draft, ctx)
        assert store.count_documents("invoices") == 1

    def test_double_submit_blocked(self, store, ctx, valid_draft):
        invoice_service.submit_invoice(store, valid_draft, ctx)
        with pytest.raises(DraftLockedError):
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert store.count_documents("invoices") == 1

    def test_customer_snapshot_is_frozen(self, store, ctx, valid_draft, test_customer):
        invoice = invoice_service.submit_invoice(store, valid_draft, ctx)
        store.update_document("customers", test_customer["id"], {"first_name": "Mehmet"})
        stored = invoice_service.get_invoice(store, invoice["id"])
        assert stored["customer"]["first_name"] == "Ahmet"

    def test_duplicate_catalog_lines_rejected(self, store, ctx, valid_draft, test_product):
        """Istemciden gelen taslakta ayni urun iki kalemde olamaz."""
        valid_draft.items.append(
            LineItem(type="product", product_id=test_product["id"], quantity=1, unit_price="100")
        )
        with pytest.raises(InvoiceValidationError) as exc:
            invoice_service.submit_invoice(store, valid_draft, ctx)
        assert "items.1" in exc.value.errors
        assert "items.0" in exc.value.errors
        assert valid_draft.state == "editing"
        assert store.count_documents("invoices") == 0

    def test_catalog_edit_does_not_change_selected_items(
        self, store, ctx, test_customer, test_biller, test_product
    ):
        """Secimden sonra urun guncellense de taslak ve kayitli fatura eski degerleri korur."""
        draft = InvoiceDraft(customer_id=test_customer["id"], biller_id=test_biller["id"])
        draft_service.select_catalog_entry(draft, 0, test_product["id"], load_catalog(store))
        invoice = invoice_service.submit_invoice(store, draft, ctx)

        store.update_document("products", test_product["id"], {"selling_price": "999", "description": "x"})

        assert draft.items[0].unit_price == Decimal("100")
        assert draft.items[0].description == "Test icin ornek urun"
        stored_item = invoice_service.get_invoice(store, invoice["id"])["items"][0]
        assert Decimal(stored_item["unit_price"]) == Decimal("100")
        assert stored_item["description"] == "Test icin ornek urun"
        assert store.count_documents("invoices") == 1

    def test_preview_does_not_persist(self, store, valid_draft):
        totals, errors = invoice_service.preview_invoice(store, valid_draft)
        assert errors == {}
        assert totals.total_amount == Decimal("236")
        assert valid_draft.state == "previewing"
        assert store.count_documents("invoices") == 0


class TestInvoiceQueries:
    """Listeleme, istatistik, silme."""

    def test_list_search_and_stats(self, store, ctx, valid_draft, test_customer, test_biller):
        invoice_service.submit_invoice(store, valid_draft, ctx)
        paid = InvoiceDraft(
            customer_id=test_customer["id"],
            biller_id=test_biller["id"],
            items=[LineItem(type="custom", description="Danismanlik", quantity=1, unit_price="50")],
            tax_rate_percent=0,
            payment_status="Paid",
        )
        invoice_service.submit_invoice(store, paid, ctx)

        invoices, total = invoice_service.get_invoices(store, payment_status="Paid")
        assert total == 1
        assert invoices[0]["total_amount"] == "50.00"

        _, total = invoice_service.get_invoices(store, search="ahmet")
        assert total == 2

        stats = invoice_service.get_invoice_stats(store)
        assert stats["total_count"] == 2
        assert stats["total_revenue"] == Decimal("286.00")
        assert stats["paid_total"] == Decimal("50.00")
        assert stats["outstanding_total"] == Decimal("236.00")
        assert stats["by_status"] == {"Due": 1, "Paid": 1}

    def test_delete(self, store, ctx, valid_draft):
        invoice = invoice_service.submit_invoice(store, valid_draft, ctx)
        invoice_service.delete_invoice(store, invoice["id"])
        assert store.count_documents("invoices") == 0


class TestInvoiceAPI:
    """REST API uzerinden taslak -> kayit akisi."""

    def test_full_flow(self, client, auth_headers, test_customer, test_biller, test_product, test_service):
        # 1. Yeni taslak
        response = client.post("/api/v1/invoices/draft", headers=auth_headers)
        assert response.status_code == 200, response.text
        draft = response.json()["draft"]
        assert len(draft["items"]) == 1

        # 2. Urun sec, miktar 2
        response = client.post(
            "/api/v1/invoices/draft/items/select",
            json={"draft": draft, "index": 0, "catalog_id": test_product["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 200, response.text
        draft = response.json()["draft"]
        response = client.post(
            "/api/v1/invoices/draft/items/quantity",
            json={"draft": draft, "index": 0, "value": 2},
            headers=auth_headers,
        )
        body = response.json()
        draft = body["draft"]
        assert Decimal(body["totals"]["total_amount"]) == Decimal("236")
        assert body["formatted"]["total_amount"] == "₹236.00"

        # 3. Musteri ve faturalayan
        draft["customer_id"] = test_customer["id"]
        draft["biller_id"] = test_biller["id"]

        # 4. Onizleme
        response = client.post("/api/v1/invoices/draft/preview", json={"draft": draft}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["is_valid"] is True

        # 5. Kaydet
        response = client.post("/api/v1/invoices", json={"draft": draft}, headers=auth_headers)
        assert response.status_code == 201, response.text
        invoice = response.json()
        assert Decimal(invoice["total_amount"]) == Decimal("236.00")
        assert invoice["items"][0]["product_id"] == test_product["id"]

        # 6. Liste ve detay
        listing = client.get("/api/v1/invoices", headers=auth_headers).json()
        assert listing["total"] == 1
        assert listing["items"][0]["customer_name"] == "Ahmet Yilmaz"
        detail = client.get(f"/api/v1/invoices/{invoice['id']}", headers=auth_headers)
        assert detail.status_code == 200

    def test_duplicate_selection_conflict(self, client, auth_headers, test_product):
        draft = {"items": [
            {"type": "product", "product_id": test_product["id"], "quantity": 1, "unit_price": "100"},
            {"type": "product"},
        ]}
        response = client.post(
            "/api/v1/invoices/draft/items/select",
            json={"draft": draft, "index": 1, "catalog_id": test_product["id"]},
            headers=auth_headers,
        )
        assert response.status_code == 409
        assert response.json()["error"] == "DUPLICATE_SELECTION"

    def test_options_exclude_selected(self, client, auth_headers, test_product):
        draft = {"items": [
            {"type": "product", "product_id": test_product["id"]},
            {"type": "product"},
        ]}
        response = client.post(
            "/api/v1/invoices/draft/items/options",
            json={"draft": draft, "index": 1, "type": "product"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json() == []

    def test_submit_validation_error(self, client, auth_headers):
        response = client.post("/api/v1/invoices", json={"draft": {"items": []}}, headers=auth_headers)
        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "INVOICE_VALIDATION_FAILED"
        assert "items" in body["details"]["errors"]
        assert "customer_id" in body["details"]["errors"]

    def test_submit_persisted_draft_conflict(self, client, auth_headers):
        response = client.post(
            "/api/v1/invoices", json={"draft": {"state": "persisted"}}, headers=auth_headers
        )
        assert response.status_code == 409

    def test_get_invoice_not_found(self, client, auth_headers):
        response = client.get(
            "/api/v1/invoices/00000000-0000-0000-0000-000000000000", headers=auth_headers
        )
        assert response.status_code == 404
        assert response.json()["detail"] == "Fatura bulunamadi"

    def test_export_csv(self, client, auth_headers, store, ctx, valid_draft):
        invoice_service.submit_invoice(store, valid_draft, ctx)
        response = client.get("/api/v1/invoices/export", headers=auth_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment" in response.headers["content-disposition"]
        lines = response.text.strip().split("\n")
        assert len(lines) == 2
        assert lines[0].startswith('"Invoice Number"')
