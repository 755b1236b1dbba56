from datetime import date

from fastapi import APIRouter, Depends, Query

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import CalendarSchema
from . import service

calendar_router = APIRouter(prefix="/calendar", tags=["calendar"])

# Finalized days in a date range
@calendar_router.get("", response_model=list[CalendarSchema])
def list_calendars(
    start: date = Query(...),
    end: date = Query(...),
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.list_calendars(uow, admin.tenant_id, start, end)

@calendar_router.get("/{business_day_id}", response_model=CalendarSchema)
def calendar_detail(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_calendar(uow, admin.tenant_id, business_day_id)
