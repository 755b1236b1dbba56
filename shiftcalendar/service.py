from datetime import date
from typing import List

from adjustment.domain import ShiftAdjustment
from core.errors import NotFoundError, ValidationError
from core.unit_of_work import UnitOfWork
from .domain import Calendar, build_calendar


def _members_of(uow: UnitOfWork, tenant_id: str, adjustments: List[ShiftAdjustment]):
    ids = {a.member_id for adj in adjustments for a in adj.assignments}
    return uow.members.find_by_ids(uow.ctx, tenant_id, ids)


def get_calendar(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> Calendar:
    day = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id)
    if not day.is_locked:
        raise NotFoundError("calendar", business_day_id)
    adjustment = uow.adjustments.find_by_day(uow.ctx, tenant_id, day.id)
    return build_calendar(day, adjustment, _members_of(uow, tenant_id, [adjustment]))


def list_calendars(uow: UnitOfWork, tenant_id: str, start: date, end: date) -> List[Calendar]:
    if end < start:
        raise ValidationError("end must not be before start", code="INVALID_RANGE")
    days = uow.business_days.find_in_range(uow.ctx, tenant_id, start, end, locked_only=True)
    adjustments = uow.adjustments.find_by_days(uow.ctx, tenant_id, [d.id for d in days])
    members = _members_of(uow, tenant_id, list(adjustments.values()))
    return [build_calendar(d, adjustments[d.id], members) for d in days if d.id in adjustments]
