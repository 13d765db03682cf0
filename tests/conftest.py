"""
KolayPanel - Test Yapilandirmasi (conftest.py)

SQLite in-memory veritabani kullanarak PostgreSQL gerektirmeden
tum API endpoint'lerini ve servisleri test etmeye olanak saglar.

Her test fonksiyonu icin temiz bir veritabani olusturulur (function scope).
"""

import uuid

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from kolaypanel.database import Base, get_db
from kolaypanel.main import app
from kolaypanel.rate_limit import limiter
from kolaypanel.services.auth import hash_password, create_access_token
from kolaypanel.services.documents import DocumentStore

# Tum modelleri import et - Base.metadata.create_all icin gerekli
from kolaypanel.models import User, Document  # noqa: F401
from kolaypanel.schemas.user import AuthContext


# ---------------------------------------------------------------------------
# SQLite In-Memory Test Veritabani
# ---------------------------------------------------------------------------

SQLITE_TEST_URL = "sqlite:///file::memory:?cache=shared"

test_engine = create_engine(
    SQLITE_TEST_URL,
    connect_args={"check_same_thread": False},
    echo=False,
)


# SQLite varsayilan olarak foreign key constraint'leri uygulamaz
@event.listens_for(test_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db_session():
    """Her test icin temiz veritabani (create_all / drop_all)."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    FastAPI TestClient.
    get_db override edilir, rate limit sayaclari her testte sifirlanir.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    limiter.reset()

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(db_session):
    """
    Test kullanicisi.
    Sifre: "Test1234!"
    """
    user = User(
        id=uuid.uuid4(),
        email="test@kolaypanel.com",
        hashed_password=hash_password("Test1234!"),
        full_name="Test Kullanici",
        is_active=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture(scope="function")
def auth_headers(test_user):
    """{"Authorization": "Bearer <jwt_token>"}"""
    token = create_access_token(test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def ctx(test_user):
    return AuthContext(user_id=test_user.id, email=test_user.email, full_name=test_user.full_name)


@pytest.fixture(scope="function")
def store(db_session, test_user):
    """test_user'a ait dokuman deposu."""
    return DocumentStore(db_session, test_user.id)


@pytest.fixture(scope="function")
def test_customer(store):
    """Test musterisi (dokuman olarak)."""
    customer_id = store.create_document("customers", {
        "customer_code": "CT1",
        "first_name": "Ahmet",
        "last_name": "Yilmaz",
        "contact_type": "email",
        "email": "ahmet@testsirket.com",
        "phone": None,
        "city": "Istanbul",
        "user_type": "customer",
        "search_terms": ["ct1", "ahmet", "yilmaz", "ahmet yilmaz", "ahmet@testsirket.com"],
    })
    return store.get_document("customers", customer_id)


@pytest.fixture(scope="function")
def test_biller(store):
    biller_id = store.create_document("billers", {
        "name": "Test Faturalayan",
        "company": "Test Sirket A.S.",
        "email": "fatura@testsirket.com",
        "city": "Istanbul",
    })
    return store.get_document("billers", biller_id)


@pytest.fixture(scope="function")
def test_product(store):
    """Satis fiyati 100 olan urun."""
    product_id = store.create_document("products", {
        "product_code": "PRD1",
        "name": "Test Urun",
        "description": "Test icin ornek urun",
        "category": "",
        "quantity": 10,
        "purchase_price": "60.00",
        "selling_price": "100.00",
        "tax": "18",
    })
    return store.get_document("products", product_id)


@pytest.fixture(scope="function")
def test_service(store):
    """Maliyeti 250 olan hizmet."""
    service_id = store.create_document("services", {
        "service_code": "SRV1",
        "name": "Test Hizmet",
        "description": "Kurulum hizmeti",
        "category": "",
        "cost": "250.00",
    })
    return store.get_document("services", service_id)

