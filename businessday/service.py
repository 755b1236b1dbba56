import logging
from datetime import date, datetime, time
from typing import Dict, List, Optional

from core.errors import ValidationError
from core.unit_of_work import UnitOfWork
from template.domain import Template
from .domain import BusinessDay, combine_local, default_response_deadline

logger = logging.getLogger(__name__)

MAX_GENERATE_DAYS = 366


def _blueprint_entries(uow: UnitOfWork, template: Template):
    entries = []
    for bp in template.slots:
        role = uow.roles.find_by_id(uow.ctx, template.tenant_id, bp.role_id)
        capacity = bp.capacity if bp.capacity is not None else role.default_capacity
        entries.append((bp.name, bp.role_id, capacity, bp.start_time, bp.end_time))
    return entries


def _build_day(
    uow: UnitOfWork, tenant, template: Template, day: date, response_deadline: Optional[datetime]
) -> BusinessDay:
    deadline = response_deadline or default_response_deadline(day, tenant.zone, template.response_deadline_hours)
    return BusinessDay.create(
        uow.clock.now(),
        tenant.id,
        template.id,
        day,
        tenant.zone,
        deadline,
        _blueprint_entries(uow, template),
    )


def get_business_day(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> BusinessDay:
    return uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id)


def list_business_days(
    uow: UnitOfWork, tenant_id: str, start: date, end: date, *, template_id: Optional[str] = None
) -> List[BusinessDay]:
    if end < start:
        raise ValidationError("end must not be before start", code="INVALID_RANGE")
    return uow.business_days.find_in_range(uow.ctx, tenant_id, start, end, template_id=template_id)


def create_business_day(
    uow: UnitOfWork,
    tenant_id: str,
    template_id: str,
    day: date,
    *,
    response_deadline: Optional[datetime] = None,
) -> BusinessDay:
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    template = uow.templates.find_by_id(uow.ctx, tenant_id, template_id)
    if uow.business_days.find_by_template_and_date(uow.ctx, tenant_id, template_id, day) is not None:
        raise ValidationError(
            "a business day already exists for this template and date",
            code="DUPLICATE_BUSINESS_DAY",
            details={"template_id": template_id, "date": day.isoformat()},
        )
    bd = _build_day(uow, tenant, template, day, response_deadline)
    uow.business_days.save(uow.ctx, bd)
    uow.commit()
    logger.info(
        "business day created",
        extra={"tenant_id": tenant_id, "business_day_id": bd.id, "template_id": template_id, "date": day.isoformat()},
    )
    return bd


def generate_business_days(
    uow: UnitOfWork, tenant_id: str, template_id: str, start: date, end: date
) -> Dict[str, int]:
    """Create a day for every occurrence in [start, end] that is neither past nor already present."""
    if end < start:
        raise ValidationError("end must not be before start", code="INVALID_RANGE")
    if (end - start).days + 1 > MAX_GENERATE_DAYS:
        raise ValidationError(
            f"range must span at most {MAX_GENERATE_DAYS} days", code="INVALID_RANGE"
        )
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    template = uow.templates.find_by_id(uow.ctx, tenant_id, template_id)
    if not template.slots:
        raise ValidationError("template has no shift slots", code="TEMPLATE_HAS_NO_SLOTS")

    today = uow.clock.now().astimezone(tenant.zone).date()
    existing = uow.business_days.existing_dates(uow.ctx, tenant_id, template_id, start, end)

    created = 0
    skipped = 0
    for day in template.recurrence.occurrences(start, end):
        if day < today or day in existing:
            skipped += 1
            continue
        uow.business_days.save(uow.ctx, _build_day(uow, tenant, template, day, None))
        created += 1

    uow.commit()
    logger.info(
        "business days generated",
        extra={
            "tenant_id": tenant_id,
            "template_id": template_id,
            "created_count": created,
            "skipped_count": skipped,
        },
    )
    return {"created": created, "skipped": skipped}


def update_response_deadline(
    uow: UnitOfWork, tenant_id: str, business_day_id: str, response_deadline: datetime
) -> BusinessDay:
    bd = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    bd.set_response_deadline(uow.clock.now(), response_deadline)
    uow.business_days.save(uow.ctx, bd)
    uow.commit()
    logger.info("response deadline changed", extra={"tenant_id": tenant_id, "business_day_id": bd.id})
    return bd


def _window(bd: BusinessDay, zone, start_time: time, end_time: time):
    return combine_local(bd.date, start_time, zone), combine_local(bd.date, end_time, zone)


def add_slot(
    uow: UnitOfWork,
    tenant_id: str,
    business_day_id: str,
    *,
    name: str,
    role_id: str,
    start_time: time,
    end_time: time,
    capacity: Optional[int] = None,
) -> BusinessDay:
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    bd = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    role = uow.roles.find_by_id(uow.ctx, tenant_id, role_id)
    start_at, end_at = _window(bd, tenant.zone, start_time, end_time)
    slot = bd.add_slot(
        uow.clock.now(),
        tenant.zone,
        name=name,
        role_id=role.id,
        capacity=role.default_capacity if capacity is None else capacity,
        start_at=start_at,
        end_at=end_at,
    )
    uow.business_days.save(uow.ctx, bd)
    uow.commit()
    logger.info("shift slot added", extra={"tenant_id": tenant_id, "business_day_id": bd.id, "shift_slot_id": slot.id})
    return bd


def update_slot(
    uow: UnitOfWork,
    tenant_id: str,
    business_day_id: str,
    slot_id: str,
    *,
    name: Optional[str] = None,
    role_id: Optional[str] = None,
    start_time: Optional[time] = None,
    end_time: Optional[time] = None,
    capacity: Optional[int] = None,
) -> BusinessDay:
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    bd = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    current = bd.slot(slot_id)
    if role_id is not None:
        uow.roles.find_by_id(uow.ctx, tenant_id, role_id)
    local_start = current.start_at.astimezone(tenant.zone).time()
    local_end = current.end_at.astimezone(tenant.zone)
    # a slot ending at local midnight keeps its end on the next day
    end_at = (
        combine_local(bd.date, end_time, tenant.zone) if end_time is not None else local_end
    )
    start_at = combine_local(bd.date, start_time if start_time is not None else local_start, tenant.zone)
    bd.update_slot(
        uow.clock.now(),
        tenant.zone,
        slot_id,
        name=name,
        role_id=role_id,
        capacity=capacity,
        start_at=start_at,
        end_at=end_at,
    )
    uow.business_days.save(uow.ctx, bd)
    uow.commit()
    logger.info("shift slot updated", extra={"tenant_id": tenant_id, "business_day_id": bd.id, "shift_slot_id": slot_id})
    return bd


def remove_slot(uow: UnitOfWork, tenant_id: str, business_day_id: str, slot_id: str) -> BusinessDay:
    bd = uow.business_days.find_by_id(uow.ctx, tenant_id, business_day_id, for_update=True)
    bd.remove_slot(uow.clock.now(), slot_id)
    uow.business_days.save(uow.ctx, bd)
    uow.commit()
    logger.info("shift slot removed", extra={"tenant_id": tenant_id, "business_day_id": bd.id, "shift_slot_id": slot_id})
    return bd


def delete_business_day(uow: UnitOfWork, tenant_id: str, business_day_id: str) -> None:
    uow.business_days.delete(uow.ctx, tenant_id, business_day_id)
    uow.commit()
    logger.info("business day deleted", extra={"tenant_id": tenant_id, "business_day_id": business_day_id})
