from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field


class StaffCreate(BaseModel):
    """Yeni personel kaydi"""
    name: str = Field(min_length=1, max_length=255)
    role: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=50)
    joining_date: date
    status: str = Field(default="active", pattern="^(active|inactive)$")
    salary: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    country: str | None = None
    state: str | None = None
    district: str | None = None
    city: str | None = None
    pincode: str | None = None


class StaffUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    role: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=50)
    joining_date: date | None = None
    status: str | None = Field(default=None, pattern="^(active|inactive)$")
    salary: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    country: str | None = None
    state: str | None = None
    district: str | None = None
    city: str | None = None
    pincode: str | None = None


class StaffResponse(StaffCreate):
    id: str
    staff_code: str
    email: str
    created_at: datetime
    updated_at: datetime | None = None


class StaffListResponse(BaseModel):
    items: list[StaffResponse]
    total: int
    page: int
    size: int
