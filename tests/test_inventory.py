"""
KolayPanel - Stok (kategori, urun, hizmet) API Testleri
"""

import pytest

INVENTORY_URL = "/api/v1/inventory"


@pytest.fixture
def product_category(client, auth_headers):
    response = client.post(f"{INVENTORY_URL}/categories/product", json={"name": "Kirtasiye"}, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def service_category(client, auth_headers):
    response = client.post(f"{INVENTORY_URL}/categories/service", json={"name": "Bakim"}, headers=auth_headers)
    return response.json()


def _product(client, headers, category_id, **overrides):
    payload = {
        "name": "Kalem",
        "description": "Mavi tukenmez kalem",
        "category": category_id,
        "quantity": 10,
        "purchase_price": "3.50",
        "selling_price": "7.00",
        "tax": "18",
    }
    payload.update(overrides)
    return client.post(f"{INVENTORY_URL}/products", json=payload, headers=headers)


class TestCategories:

    def test_list_sorted(self, client, auth_headers):
        for name in ("Zirai", "Elektronik"):
            client.post(f"{INVENTORY_URL}/categories/product", json={"name": name}, headers=auth_headers)
        names = [c["name"] for c in client.get(f"{INVENTORY_URL}/categories/product", headers=auth_headers).json()]
        assert names == ["Elektronik", "Zirai"]

    def test_invalid_kind(self, client, auth_headers):
        response = client.get(f"{INVENTORY_URL}/categories/diger", headers=auth_headers)
        assert response.status_code == 400

    def test_delete_missing(self, client, auth_headers):
        response = client.delete(f"{INVENTORY_URL}/categories/product/yok", headers=auth_headers)
        assert response.status_code == 404


class TestProducts:

    def test_create_product(self, client, auth_headers, product_category):
        response = _product(client, auth_headers, product_category["id"])
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["product_code"] == "PRD1"
        assert data["category_name"] == "Kirtasiye"

    def test_unknown_category(self, client, auth_headers):
        response = _product(client, auth_headers, "olmayan-kategori")
        assert response.status_code == 404
        assert response.json()["detail"] == "Kategori bulunamadi"

    def test_negative_price_rejected(self, client, auth_headers, product_category):
        response = _product(client, auth_headers, product_category["id"], selling_price="-1")
        assert response.status_code == 422

    def test_list_filters(self, client, auth_headers, product_category):
        other = client.post(f"{INVENTORY_URL}/categories/product", json={"name": "Gida"}, headers=auth_headers).json()
        _product(client, auth_headers, product_category["id"])
        _product(client, auth_headers, other["id"], name="Cay")

        by_category = client.get(
            f"{INVENTORY_URL}/products", params={"category": other["id"]}, headers=auth_headers
        ).json()
        assert [p["name"] for p in by_category] == ["Cay"]

        by_search = client.get(f"{INVENTORY_URL}/products", params={"search": "kal"}, headers=auth_headers).json()
        assert [p["name"] for p in by_search] == ["Kalem"]

    def test_deleted_category_shows_unknown(self, client, auth_headers, product_category):
        product = _product(client, auth_headers, product_category["id"]).json()
        client.delete(f"{INVENTORY_URL}/categories/product/{product_category['id']}", headers=auth_headers)
        data = client.get(f"{INVENTORY_URL}/products/{product['id']}", headers=auth_headers).json()
        assert data["category_name"] == "Unknown"

    def test_update_product(self, client, auth_headers, product_category):
        product = _product(client, auth_headers, product_category["id"]).json()
        response = client.put(
            f"{INVENTORY_URL}/products/{product['id']}", json={"selling_price": "9.50"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["selling_price"] == "9.50"
        assert response.json()["name"] == "Kalem"


class TestStock:

    def test_adjust_stock(self, client, auth_headers, product_category):
        product = _product(client, auth_headers, product_category["id"]).json()
        url = f"{INVENTORY_URL}/products/{product['id']}/stock"

        assert client.post(url, json={"delta": 5}, headers=auth_headers).json()["quantity"] == 15
        assert client.post(url, json={"delta": -15, "reason": "satis"}, headers=auth_headers).json()["quantity"] == 0

    def test_stock_cannot_go_negative(self, client, auth_headers, product_category):
        product = _product(client, auth_headers, product_category["id"]).json()
        response = client.post(
            f"{INVENTORY_URL}/products/{product['id']}/stock", json={"delta": -11}, headers=auth_headers
        )
        assert response.status_code == 400
        assert "Yetersiz stok" in response.json()["detail"]
        data = client.get(f"{INVENTORY_URL}/products/{product['id']}", headers=auth_headers).json()
        assert data["quantity"] == 10


class TestServices:

    def test_service_crud(self, client, auth_headers, service_category):
        response = client.post(
            f"{INVENTORY_URL}/services",
            json={"name": "Yillik Bakim", "description": "12 ay", "category": service_category["id"], "cost": "1200"},
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        service = response.json()
        assert service["service_code"] == "SRV1"
        assert service["category_name"] == "Bakim"

        updated = client.put(
            f"{INVENTORY_URL}/services/{service['id']}", json={"cost": "1500"}, headers=auth_headers
        ).json()
        assert updated["cost"] == "1500"

        assert client.delete(f"{INVENTORY_URL}/services/{service['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"{INVENTORY_URL}/services", headers=auth_headers).json() == []

    def test_export_services(self, client, auth_headers, service_category):
        client.post(
            f"{INVENTORY_URL}/services",
            json={"name": "Kurulum", "description": "Yerinde", "category": service_category["id"], "cost": "300"},
            headers=auth_headers,
        )
        response = client.get(f"{INVENTORY_URL}/services/export", headers=auth_headers)
        lines = response.text.strip().split("\n")
        assert lines[0] == '"Service Code","Name","Category","Cost"'
        assert lines[1] == '"SRV1","Kurulum","Bakim","300"'
