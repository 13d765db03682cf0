"""
Uygulama hata tipleri.

Bulunamayan kayitlar icin servisler dogrudan HTTPException(404) firlatir.
Fatura akisina ozgu hatalar (dogrulama, tekrar secim, kaydetme hatasi)
asagidaki siniflarla temsil edilir; main.py bunlari JSON yanita cevirir.
"""

from typing import Any


class KolayPanelError(Exception):
    """
    Tum uygulama hatalarinin temel sinifi.

    Attributes:
        message: Kullaniciya gosterilecek mesaj
        error_code: Hata kategorisi (ornek: "DUPLICATE_SELECTION")
        details: Ek bilgiler (alan bazli hatalar, id'ler vb.)
    """

    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """API yaniti icin dict'e cevir."""
        return {
            "error": self.error_code,
            "detail": self.message,
            "details": self.details,
        }


class InvoiceValidationError(KolayPanelError):
    """Fatura formu eksik veya hatali. Tum alan hatalari birlikte raporlanir."""

    status_code = 422

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__(
            "Fatura bilgileri eksik veya hatali",
            error_code="INVOICE_VALIDATION_FAILED",
            details={"errors": errors},
        )
        self.errors = errors


class DuplicateSelectionError(KolayPanelError):
    """Ayni katalog kaydi ayni tipte ikinci bir kaleme secilmeye calisildi."""

    status_code = 409

    def __init__(self, item_type: str, catalog_id: str):
        label = "Urun" if item_type == "product" else "Hizmet"
        super().__init__(
            f"{label} bu faturaya zaten eklenmis",
            error_code="DUPLICATE_SELECTION",
            details={"type": item_type, "catalog_id": catalog_id},
        )


class CatalogEntryNotFoundError(KolayPanelError):
    """Secilen urun/hizmet katalogda yok."""

    status_code = 404

    def __init__(self, item_type: str, catalog_id: str):
        super().__init__(
            "Katalog kaydi bulunamadi",
            error_code="CATALOG_ENTRY_NOT_FOUND",
            details={"type": item_type, "catalog_id": catalog_id},
        )


class DraftLockedError(KolayPanelError):
    """Kaydedilmekte olan veya kaydedilmis taslak degistirilemez."""

    status_code = 409

    def __init__(self, state: str):
        super().__init__(
            "Fatura su anda duzenlenemez",
            error_code="DRAFT_LOCKED",
            details={"state": state},
        )


class InvalidOperationError(KolayPanelError):
    """Istek mevcut veri icin anlamsiz (ornek: ozel kaleme katalog secimi)."""

    status_code = 400


class PersistenceError(KolayPanelError):
    """Veritabanina yazma basarisiz. Form bilgileri korunur, tekrar denenebilir."""

    status_code = 503

    def __init__(self, message: str = "Kayit sirasinda bir hata olustu. Lutfen tekrar deneyin."):
        super().__init__(message, error_code="PERSISTENCE_FAILED")
