from fastapi import APIRouter, Depends

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from businessday.schema import BusinessDaySchema
from .schema import ShiftAdjustmentSchema, FinalizePayload
from . import service

adjustment_router = APIRouter(prefix="/business-days/{business_day_id}", tags=["adjustments"])

@adjustment_router.get("/adjustment", response_model=ShiftAdjustmentSchema)
def adjustment_detail(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_adjustment(uow, admin.tenant_id, business_day_id)

# Finalize: validate, lock the day, replace the adjustment
@adjustment_router.put("/adjustment", response_model=ShiftAdjustmentSchema)
def adjustment_put(
    business_day_id: str,
    payload: FinalizePayload,
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    pairs = [(a.shift_slot_id, a.member_id) for a in payload.assignments]
    return service.finalize_adjustment(uow, admin.tenant_id, business_day_id, pairs, admin.admin_id)

# Reopen a finalized day
@adjustment_router.post("/reopen", response_model=BusinessDaySchema)
def business_day_reopen(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.reopen_business_day(uow, admin.tenant_id, business_day_id)
