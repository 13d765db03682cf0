from datetime import date

from fastapi import APIRouter, Query, status
from pydantic import BaseModel, Field

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.payroll import (
    PayrollCreate,
    PayrollReport,
    PayrollResponse,
    SalaryCreate,
    SalaryResponse,
)
from kolaypanel.schemas.staff import StaffCreate, StaffListResponse, StaffResponse, StaffUpdate
from kolaypanel.services import payroll as payroll_service
from kolaypanel.services import staff as staff_service

router = APIRouter()


class PayrollStatusUpdate(BaseModel):
    status: str = Field(pattern="^(pending|paid|failed)$")


# ============================================================
# Maaslar ve bordro (/{staff_id} yolundan once tanimlanmali)
# ============================================================

@router.get("/salaries", response_model=list[SalaryResponse])
def list_salaries(store: StoreDep, search: str | None = Query(default=None)):
    return payroll_service.get_salaries(store, search)


@router.post("/salaries", response_model=SalaryResponse, status_code=status.HTTP_201_CREATED)
def create_salary(data: SalaryCreate, store: StoreDep):
    """Maas tanimi. Net maas = temel maas + ek odemeler - kesintiler."""
    return payroll_service.create_salary(store, data)


@router.get("/salaries/export")
def export_salaries(store: StoreDep, search: str | None = Query(default=None)):
    return payroll_service.export_salaries_csv(store, search)


@router.delete("/salaries/{salary_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_salary(salary_id: str, store: StoreDep):
    payroll_service.delete_salary(store, salary_id)


@router.get("/payroll", response_model=list[PayrollResponse])
def list_payroll(
    store: StoreDep,
    start: date | None = Query(default=None, description="Odeme tarihi baslangic"),
    end: date | None = Query(default=None, description="Odeme tarihi bitis"),
    payment_status: str | None = Query(default=None, description="pending/paid/failed"),
):
    return payroll_service.get_payroll_records(store, start, end, payment_status)


@router.post("/payroll", response_model=PayrollResponse, status_code=status.HTTP_201_CREATED)
def create_payroll(data: PayrollCreate, store: StoreDep):
    """Bordro odemesi. Net odeme = maas - kesintiler."""
    return payroll_service.create_payroll(store, data)


@router.get("/payroll/report", response_model=PayrollReport)
def payroll_report(store: StoreDep, start: date = Query(), end: date = Query()):
    """Donem raporu: toplamlar ve duruma gore odeme sayilari."""
    return payroll_service.payroll_report(store, start, end)


@router.get("/payroll/export")
def export_payroll(
    store: StoreDep,
    start: date | None = Query(default=None),
    end: date | None = Query(default=None),
):
    return payroll_service.export_payroll_csv(store, start, end)


@router.patch("/payroll/{payroll_id}", response_model=PayrollResponse)
def update_payroll_status(payroll_id: str, data: PayrollStatusUpdate, store: StoreDep):
    return payroll_service.update_payroll_status(store, payroll_id, data.status)


@router.delete("/payroll/{payroll_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payroll(payroll_id: str, store: StoreDep):
    payroll_service.delete_payroll(store, payroll_id)


# ============================================================
# Personel
# ============================================================

@router.get("", response_model=StaffListResponse)
def list_staff(
    store: StoreDep,
    page: int = Query(default=1, ge=1),
    size: int = Query(default=20, ge=1, le=100),
    search: str | None = Query(default=None, description="Isim, email, rol veya kod"),
    staff_status: str | None = Query(default=None, alias="status", description="active/inactive"),
):
    staff, total = staff_service.get_staff_list(store, search, staff_status, page, size)
    return StaffListResponse(items=staff, total=total, page=page, size=size)


@router.post("", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
def create_staff(data: StaffCreate, store: StoreDep):
    """Yeni personel. Personel kodu (ST1, ST2 ...) otomatik verilir."""
    return staff_service.create_staff(store, data)


@router.get("/{staff_id}", response_model=StaffResponse)
def get_staff(staff_id: str, store: StoreDep):
    return staff_service.get_staff(store, staff_id)


@router.put("/{staff_id}", response_model=StaffResponse)
def update_staff(staff_id: str, data: StaffUpdate, store: StoreDep):
    return staff_service.update_staff(store, staff_id, data)


@router.delete("/{staff_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff(staff_id: str, store: StoreDep):
    staff_service.delete_staff(store, staff_id)
