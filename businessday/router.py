from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import (
    BusinessDaySchema,
    BusinessDayCreatePayload,
    BusinessDayGeneratePayload,
    BusinessDayUpdate,
    GenerateResult,
    ShiftSlotCreatePayload,
    ShiftSlotUpdate,
)
from . import service

businessday_router = APIRouter(prefix="/business-days", tags=["business days"])

# List business days in a date range
@businessday_router.get("", response_model=list[BusinessDaySchema])
def list_business_days(
    start: date = Query(...),
    end: date = Query(...),
    template_id: Optional[str] = Query(None),
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.list_business_days(uow, admin.tenant_id, start, end, template_id=template_id)

@businessday_router.get("/{business_day_id}", response_model=BusinessDaySchema)
def business_day_detail(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_business_day(uow, admin.tenant_id, business_day_id)

# Create one business day from a template
@businessday_router.post("", response_model=BusinessDaySchema, status_code=status.HTTP_201_CREATED)
def business_day_post(payload: BusinessDayCreatePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.create_business_day(
        uow, admin.tenant_id, payload.template_id, payload.date, response_deadline=payload.response_deadline
    )

# Fill a date range from the template's recurrence
@businessday_router.post("/generate", response_model=GenerateResult)
def business_days_generate(payload: BusinessDayGeneratePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.generate_business_days(uow, admin.tenant_id, payload.template_id, payload.start, payload.end)

@businessday_router.patch("/{business_day_id}", response_model=BusinessDaySchema)
def business_day_patch(business_day_id: str, payload: BusinessDayUpdate, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.update_response_deadline(uow, admin.tenant_id, business_day_id, payload.response_deadline)

@businessday_router.delete("/{business_day_id}")
def business_day_delete(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.delete_business_day(uow, admin.tenant_id, business_day_id)
    return {"message": "business day deleted"}

# --- slots ---

@businessday_router.post("/{business_day_id}/slots", response_model=BusinessDaySchema, status_code=status.HTTP_201_CREATED)
def slot_post(business_day_id: str, payload: ShiftSlotCreatePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.add_slot(uow, admin.tenant_id, business_day_id, **payload.model_dump())

@businessday_router.patch("/{business_day_id}/slots/{slot_id}", response_model=BusinessDaySchema)
def slot_patch(business_day_id: str, slot_id: str, payload: ShiftSlotUpdate, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.update_slot(uow, admin.tenant_id, business_day_id, slot_id, **payload.model_dump(exclude_unset=True))

@businessday_router.delete("/{business_day_id}/slots/{slot_id}", response_model=BusinessDaySchema)
def slot_delete(business_day_id: str, slot_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.remove_slot(uow, admin.tenant_id, business_day_id, slot_id)
