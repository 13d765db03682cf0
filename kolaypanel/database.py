from collections.abc import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from kolaypanel.config import settings


def _connect_args(url: str) -> dict:
    # SQLite baglantisi farkli thread'lerden kullanilabilsin (uvicorn worker'lari)
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# pool_pre_ping: kopmus PostgreSQL baglantilari istekten once yenilenir
engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    pool_pre_ping=True,
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Kullanici ve dokuman tablolarinin ortak temel sinifi."""


def get_db() -> Iterator[Session]:
    """
    Istek basina bir oturum.
    Dokuman deposu (DocumentStore) bu oturum uzerinden calisir,
    istek bitince oturum kapatilir.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
