from fastapi import APIRouter, status

from kolaypanel.dependencies import StoreDep
from kolaypanel.schemas.biller import BillerCreate, BillerUpdate, BillerResponse
from kolaypanel.services import biller as biller_service

router = APIRouter()


@router.get("", response_model=list[BillerResponse])
def list_billers(store: StoreDep):
    return biller_service.get_billers(store)


@router.post("", response_model=BillerResponse, status_code=status.HTTP_201_CREATED)
def create_biller(data: BillerCreate, store: StoreDep):
    return biller_service.create_biller(store, data)


@router.get("/{biller_id}", response_model=BillerResponse)
def get_biller(biller_id: str, store: StoreDep):
    return biller_service.get_biller(store, biller_id)


@router.put("/{biller_id}", response_model=BillerResponse)
def update_biller(biller_id: str, data: BillerUpdate, store: StoreDep):
    return biller_service.update_biller(store, biller_id, data)


@router.delete("/{biller_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_biller(biller_id: str, store: StoreDep):
    biller_service.delete_biller(store, biller_id)
