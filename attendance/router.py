from fastapi import APIRouter, Depends

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import AttendanceSchema, AttendanceSubmitPayload
from . import service

attendance_router = APIRouter(prefix="/business-days/{business_day_id}/attendance", tags=["attendance"])

# List responses for a day
@attendance_router.get("", response_model=list[AttendanceSchema])
def list_attendance(business_day_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.list_attendance(uow, admin.tenant_id, business_day_id)

@attendance_router.get("/{member_id}", response_model=AttendanceSchema)
def member_attendance(business_day_id: str, member_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_member_attendance(uow, admin.tenant_id, business_day_id, member_id)

# Submit or overwrite a member's response
@attendance_router.put("/{member_id}", response_model=AttendanceSchema)
def attendance_put(
    business_day_id: str,
    member_id: str,
    payload: AttendanceSubmitPayload,
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.submit_attendance(
        uow, admin.tenant_id, business_day_id, member_id, payload.status, note=payload.note
    )
