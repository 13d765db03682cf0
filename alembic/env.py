"""
Alembic migration ortami.

Sadece iki tablo vardir: users ve documents. Koleksiyon icerikleri JSON
oldugu icin yeni bir sayfa veya alan eklemek migration gerektirmez.

    alembic upgrade head
    alembic revision --autogenerate -m "aciklama"
"""

import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from kolaypanel.config import settings  # noqa: E402
from kolaypanel.database import Base, engine  # noqa: E402
import kolaypanel.models  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# SQLite ALTER TABLE desteklemez, tablolar kopyalanarak degistirilir
COMMON_OPTIONS = {
    "target_metadata": Base.metadata,
    "compare_type": True,
    "render_as_batch": settings.DATABASE_URL.startswith("sqlite"),
}


def run_migrations_offline() -> None:
    """SQL ciktisi uret (--sql), veritabanina baglanma."""
    context.configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMMON_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # Uygulamanin kendi engine'i: ayni URL ve baglanti ayarlari
    with engine.connect() as connection:
        context.configure(connection=connection, **COMMON_OPTIONS)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
