import logging
from typing import Iterable, List, Tuple, Union

from businessday.domain import BusinessDay
from core.errors import ConflictError, SchedulingRuleViolation, ValidationError
from core.unit_of_work import UnitOfWork
from .domain import Assignment, ShiftAdjustment

logger = logging.getLogger(__name__)


def _as_assignments(items: Iterable[Union[Assignment, Tuple[str, str]]]) -> List[Assignment]:
    return [a if isinstance(a, Assignment) else Assignment(*a) for a in items]


def finalize_adjustment(
    uow: UnitOfWork,
    tenant_id: str,
    business_day_id: str,
    assignments: Iterable[Union[Assignment, Tuple[str, str]]],
    admin_id: str,
) -> ShiftAdjustment:
    """
    Validate the mapping, lock the day and store the adjustment in one transaction.

    Nothing is written unless every check passes. A day that is already locked,
    or that another finalization locked first, fails with ConflictError. Members
    may respond until the response deadline, so finalizing before it fails.
    """
    items = _as_assignments(assignments)
    day = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    if day.is_locked:
        raise ConflictError(
            "business day is already finalized",
            code="BUSINESS_DAY_LOCKED",
            details={"business_day_id": day.id},
        )
    now = uow.clock.now()
    if day.accepts_responses(now):
        raise ValidationError(
            "attendance responses are still open for this business day",
            code="RESPONSE_WINDOW_OPEN",
            details={"business_day_id": day.id, "response_deadline": day.response_deadline.isoformat()},
        )

    members = uow.members.find_by_ids(uow.ctx, tenant_id, {a.member_id for a in items})
    attendance = {a.member_id: a for a in uow.attendances.find_by_day(uow.ctx, tenant_id, day.id)}

    try:
        adjustment = ShiftAdjustment.create(
            now, day, items, admin_id, members=members, attendance=attendance
        )
    except SchedulingRuleViolation as e:
        logger.warning(
            "shift adjustment rejected",
            extra={"tenant_id": tenant_id, "business_day_id": day.id, "code": e.code, "details": e.details},
        )
        raise

    day.lock(now)
    uow.business_days.save(uow.ctx, day)
    uow.adjustments.replace(uow.ctx, adjustment)
    uow.commit()
    logger.info(
        "shift adjustment finalized",
        extra={
            "tenant_id": tenant_id,
            "business_day_id": day.id,
            "adjustment_id": adjustment.id,
            "assignments": len(adjustment.assignments),
            "admin_id": admin_id,
        },
    )
    return adjustment


def reopen_business_day(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> BusinessDay:
    """Clear the lock and discard the adjustment. Reopening an open day changes nothing."""
    day = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    if not day.reopen(uow.clock.now()):
        return day
    uow.business_days.save(uow.ctx, day)
    uow.adjustments.delete_by_day(uow.ctx, tenant_id, day.id)
    uow.commit()
    logger.info("business day reopened", extra={"tenant_id": tenant_id, "business_day_id": day.id})
    return day


def get_adjustment(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> ShiftAdjustment:
    return uow.adjustments.find_by_day(uow.ctx, tenant_id, business_day_id)
