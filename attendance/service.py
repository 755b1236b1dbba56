import logging
from typing import List, Optional

from core.errors import NotFoundError, ValidationError
from core.unit_of_work import UnitOfWork
from .domain import Attendance

logger = logging.getLogger(__name__)


def submit_attendance(
    uow: UnitOfWork,
    tenant_id: str,
    business_day_id: str,
    member_id: str,
    status: str,
    *,
    note: Optional[str] = None,
) -> Attendance:
    bd = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id)
    member = uow.members.find_by_id(uow.ctx, tenant_id, member_id)
    if not member.is_active:
        raise NotFoundError("member", member_id)

    now = uow.clock.now()
    if bd.is_locked:
        raise ValidationError(
            "business day is locked", code="BUSINESS_DAY_LOCKED", details={"business_day_id": bd.id}
        )
    if now > bd.response_deadline:
        raise ValidationError(
            "response deadline has passed",
            code="RESPONSE_DEADLINE_PASSED",
            details={"business_day_id": bd.id, "response_deadline": bd.response_deadline.isoformat()},
        )

    stored = uow.attendances.upsert(
        uow.ctx, Attendance.create(now, tenant_id, bd.id, member.id, status, note)
    )
    uow.commit()
    logger.info(
        "attendance submitted",
        extra={
            "tenant_id": tenant_id,
            "business_day_id": bd.id,
            "member_id": member.id,
            "status": stored.status.value,
        },
    )
    return stored


def list_attendance(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> List[Attendance]:
    uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id)
    return uow.attendances.find_by_day(uow.ctx, tenant_id, business_day_id)


def get_member_attendance(uow: UnitOfWork, tenant_id: str, business_day_id: str, member_id: str) -> Attendance:
    return uow.attendances.find_by_day_and_member(uow.ctx, tenant_id, business_day_id, member_id)
