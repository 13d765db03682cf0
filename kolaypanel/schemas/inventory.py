from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# --- Kategori Schemalari ---

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: datetime


# --- Urun Schemalari ---

class ProductCreate(BaseModel):
    """Stoga yeni urun eklemek icin"""
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, description="Urun kategorisi id'si")
    quantity: int = Field(default=0, ge=0)
    purchase_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    selling_price: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    # Vergi orani (yuzde olarak, ornek: 18 = %18)
    tax: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    image_url: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    quantity: int | None = Field(default=None, ge=0)
    purchase_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    selling_price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    tax: Decimal | None = Field(default=None, ge=0, le=100)
    image_url: str | None = None


class ProductResponse(BaseModel):
    id: str
    product_code: str
    name: str
    description: str
    category: str
    category_name: str = "Unknown"
    quantity: int
    purchase_price: Decimal
    selling_price: Decimal
    tax: Decimal
    image_url: str | None = None
    created_at: datetime


class StockAdjust(BaseModel):
    """Stok hareketi: pozitif giris, negatif cikis."""
    delta: int
    reason: str | None = Field(default=None, max_length=255)


# --- Hizmet Schemalari ---

class ServiceCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, description="Hizmet kategorisi id'si")
    cost: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    image_url: str | None = None


class ServiceUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    cost: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    image_url: str | None = None


class ServiceResponse(BaseModel):
    id: str
    service_code: str
    name: str
    description: str
    category: str
    category_name: str = "Unknown"
    cost: Decimal
    image_url: str | None = None
    created_at: datetime
