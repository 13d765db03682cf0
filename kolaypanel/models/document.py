import uuid
from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from kolaypanel.database import Base


class Document(Base):
    """
    Dokuman deposu kaydi.
    Her satir bir koleksiyondaki (customers, invoices, blogs ...) tek bir
    JSON dokumani temsil eder. Sema zorlanmaz, uygulama ne yazarsa o saklanir.
    """

    __tablename__ = "documents"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Koleksiyon adi (ornek: "invoices", "staff-salaries")
    collection: Mapped[str] = mapped_column(
        String(64), nullable=False, index=True
    )
    # Dokuman icerigi (JSON uyumlu dict)
    data: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    owner: Mapped["User"] = relationship(back_populates="documents")  # noqa: F821
