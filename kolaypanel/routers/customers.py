from fastapi import APIRouter, Query, status

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.customer import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerListResponse,
)
from kolaypanel.services import customer as customer_service

router = APIRouter()


@router.get("", response_model=CustomerListResponse)
def list_customers(
    store: StoreDep,
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit"),
    search: str | None = Query(default=None, description="Arama (kod, isim, email, telefon)"),
):
    """Musteri listesi. Sayfalama ve arama destekler."""
    customers, total = customer_service.get_customers(store, search=search, page=page, size=size)
    return CustomerListResponse(items=customers, total=total, page=page, size=size)


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def create_customer(data: CustomerCreate, store: StoreDep):
    """Yeni musteri olustur. Musteri kodu (CT1, CT2 ...) otomatik verilir."""
    return customer_service.create_customer(store, data)


@router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(customer_id: str, store: StoreDep):
    return customer_service.get_customer(store, customer_id)


@router.put("/{customer_id}", response_model=CustomerResponse)
def update_customer(customer_id: str, data: CustomerUpdate, store: StoreDep):
    """Musteriyi guncelle. Sadece gonderilen alanlar degisir."""
    return customer_service.update_customer(store, customer_id, data)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(customer_id: str, store: StoreDep):
    """Musteriyi sil. Onceki faturalardaki musteri bilgisi korunur."""
    customer_service.delete_customer(store, customer_id)
