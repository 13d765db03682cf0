# Tum modelleri buradan import ediyoruz
# Boylece Alembic autogenerate tum tablolari gorebilir
from kolaypanel.models.user import User
from kolaypanel.models.document import Document

__all__ = ["User", "Document"]
