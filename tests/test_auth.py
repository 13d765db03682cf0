"""
KolayPanel - Kimlik Dogrulama Testleri

Test edilen endpoint'ler:
    POST /api/v1/auth/register
    POST /api/v1/auth/login
    GET  /api/v1/auth/me
"""

LOGIN_URL = "/api/v1/auth/login"


class TestRegister:
    """Kullanici kayit islemleri."""

    def test_register(self, client):
        """Yeni kullanici kayit olabilmeli, sifre response'da olmamali."""
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "yeni@kolaypanel.com", "password": "Guclu1234!", "full_name": "Yeni Kullanici"},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        assert data["email"] == "yeni@kolaypanel.com"
        assert data["is_active"] is True
        assert "hashed_password" not in data
        assert "password" not in data

    def test_register_duplicate_email(self, client, test_user):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "test@kolaypanel.com", "password": "Guclu1234!", "full_name": "Duplikat"},
        )
        assert response.status_code == 400
        assert "zaten kayitli" in response.json()["detail"]

    def test_register_short_password(self, client):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": "kisa@kolaypanel.com", "password": "Ab1!", "full_name": "Kisa Sifre"},
        )
        assert response.status_code == 422


class TestLogin:
    """Giris islemleri."""

    def test_login_and_me(self, client, test_user):
        """Login'den donen token ile /me endpoint'ine erisebilmeli."""
        response = client.post(LOGIN_URL, data={"username": "test@kolaypanel.com", "password": "Test1234!"})
        assert response.status_code == 200, response.text
        data = response.json()
        assert data["token_type"] == "bearer"

        me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
        assert me.status_code == 200
        assert me.json()["full_name"] == "Test Kullanici"

    def test_login_wrong_password(self, client, test_user):
        response = client.post(LOGIN_URL, data={"username": "test@kolaypanel.com", "password": "Yanlis123!"})
        assert response.status_code == 401
        assert "hatali" in response.json()["detail"].lower()

    def test_login_inactive_user(self, client, db_session, test_user):
        """Devre disi hesap giris yapamamali (403)."""
        test_user.is_active = False
        db_session.commit()
        response = client.post(LOGIN_URL, data={"username": "test@kolaypanel.com", "password": "Test1234!"})
        assert response.status_code == 403


class TestProtectedEndpoints:
    """Token kontrolu."""

    def test_without_token(self, client):
        response = client.get("/api/v1/customers")
        assert response.status_code == 401
        assert response.json()["detail"] == "Token bulunamadi"

    def test_invalid_token(self, client):
        response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer gecersiz-token"})
        assert response.status_code == 401

    def test_cookie_token(self, client, test_user, auth_headers):
        """Token cookie ile de gonderilebilmeli."""
        token = auth_headers["Authorization"].split(" ", 1)[1]
        client.cookies.set("access_token", token)
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 200
        assert response.json()["email"] == "test@kolaypanel.com"

    def test_users_see_only_their_documents(self, client, db_session, test_user, auth_headers, test_customer):
        """Baska kullanicinin kayitlari gorunmemeli."""
        from kolaypanel.models import User
        from kolaypanel.services.auth import create_access_token, hash_password

        other = User(email="diger@kolaypanel.com", hashed_password=hash_password("Diger1234!"), full_name="Diger")
        db_session.add(other)
        db_session.commit()
        headers = {"Authorization": f"Bearer {create_access_token(other.id)}"}

        assert client.get("/api/v1/customers", headers=headers).json()["total"] == 0
        assert client.get(f"/api/v1/customers/{test_customer['id']}", headers=headers).status_code == 404
        assert client.get("/api/v1/customers", headers=auth_headers).json()["total"] == 1

    def test_login_sets_cookie_and_logout_clears_it(self, client, test_user):
        client.post(LOGIN_URL, data={"username": "test@kolaypanel.com", "password": "Test1234!"})
        assert client.get("/api/v1/auth/me").status_code == 200

        assert client.post("/api/v1/auth/logout").status_code == 204
        assert client.get("/api/v1/auth/me").status_code == 401
