from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, model_validator


class CustomerCreate(BaseModel):
    """
    Yeni musteri olusturmak icin.
    contact_type hangi iletisim bilgisinin zorunlu oldugunu belirler.
    """
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(default="", max_length=100)
    contact_type: str = Field(default="email", pattern="^(email|phone|both)$")
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    country: str | None = Field(default=None, max_length=100)
    state: str | None = Field(default=None, max_length=100)
    district: str | None = Field(default=None, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    pincode: str | None = Field(default=None, max_length=20)
    user_type: str = Field(default="customer", max_length=50)

    @model_validator(mode="after")
    def _check_contact(self) -> "CustomerCreate":
        if self.contact_type in ("email", "both") and not self.email:
            raise ValueError("Email zorunlu")
        if self.contact_type in ("phone", "both") and not self.phone:
            raise ValueError("Telefon zorunlu")
        return self


class CustomerUpdate(BaseModel):
    """Tum alanlar opsiyonel (partial update)."""
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    contact_type: str | None = Field(default=None, pattern="^(email|phone|both)$")
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    country: str | None = None
    state: str | None = None
    district: str | None = None
    city: str | None = None
    pincode: str | None = None
    user_type: str | None = None


class CustomerResponse(BaseModel):
    id: str
    customer_code: str
    first_name: str
    last_name: str = ""
    contact_type: str
    email: str | None = None
    phone: str | None = None
    country: str | None = None
    state: str | None = None
    district: str | None = None
    city: str | None = None
    pincode: str | None = None
    user_type: str
    created_at: datetime


class CustomerListResponse(BaseModel):
    """Musteri listesi (sayfalama destekli)"""
    items: list[CustomerResponse]
    total: int
    page: int
    size: int
