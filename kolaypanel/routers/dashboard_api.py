from fastapi import APIRouter

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.dashboard import DashboardResponse
from kolaypanel.services.dashboard import get_dashboard

router = APIRouter()


@router.get("", response_model=DashboardResponse)
def dashboard(store: StoreDep):
    """
    Ana panel ozeti: kayit sayilari, ciro, gider, kar,
    bu yilin aylik satislari ve son 5 fatura.
    """
    return get_dashboard(store)
