from __future__ import annotations
from datetime import date
from typing import List, Optional, Set

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import ConflictError, NotFoundError, ValidationError
from .domain import BusinessDay, ShiftSlot
from .models import BusinessDayRecord, ShiftSlotRecord
from .repository import BusinessDayRepository


def _slot_to_domain(row: ShiftSlotRecord) -> ShiftSlot:
    return ShiftSlot.reconstruct(
        id=row.id,
        business_day_id=row.business_day_id,
        role_id=row.role_id,
        name=row.name,
        capacity=row.capacity,
        start_at=aware(row.start_at),
        end_at=aware(row.end_at),
    )


def _to_domain(row: BusinessDayRecord) -> BusinessDay:
    return BusinessDay.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        template_id=row.template_id,
        date=row.date,
        response_deadline=aware(row.response_deadline),
        locked_at=aware(row.locked_at),
        version=row.version,
        slots=[_slot_to_domain(s) for s in sorted(row.slots, key=lambda s: (aware(s.start_at), s.id))],
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
    )


def _slot_row(slot: ShiftSlot) -> ShiftSlotRecord:
    return ShiftSlotRecord(
        id=slot.id,
        role_id=slot.role_id,
        name=slot.name,
        capacity=slot.capacity,
        start_at=slot.start_at,
        end_at=slot.end_at,
    )


class SqlBusinessDayRepository(BusinessDayRepository):
    def __init__(self, session: Session):
        self.session = session

    def _scoped(self, tenant_id: str):
        return select(BusinessDayRecord).where(BusinessDayRecord.tenant_id == tenant_id)

    def save(self, ctx: Context, day: BusinessDay) -> None:
        ctx.check()
        if day.persisted_version is None:
            self._insert(day)
        else:
            self._update(day)
        day.mark_persisted()

    def _insert(self, day: BusinessDay) -> None:
        row = BusinessDayRecord(
            id=day.id,
            tenant_id=day.tenant_id,
            template_id=day.template_id,
            date=day.date,
            response_deadline=day.response_deadline,
            locked_at=day.locked_at,
            version=day.version,
            created_at=day.created_at,
            updated_at=day.updated_at,
            slots=[_slot_row(s) for s in day.slots],
        )
        self.session.add(row)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise ValidationError(
                "a business day already exists for this template and date",
                code="DUPLICATE_BUSINESS_DAY",
                details={"template_id": day.template_id, "date": day.date.isoformat()},
            )

    def _update(self, day: BusinessDay) -> None:
        stmt = (
            update(BusinessDayRecord)
            .where(
                BusinessDayRecord.id == day.id,
                BusinessDayRecord.tenant_id == day.tenant_id,
                BusinessDayRecord.version == day.persisted_version,
            )
            .values(
                response_deadline=day.response_deadline,
                locked_at=day.locked_at,
                version=day.version,
                updated_at=day.updated_at,
            )
        )
        result = self.session.execute(stmt)
        if result.rowcount != 1:
            exists = self.session.scalar(
                select(BusinessDayRecord.id).where(
                    BusinessDayRecord.id == day.id, BusinessDayRecord.tenant_id == day.tenant_id
                )
            )
            if exists is None:
                raise NotFoundError("business day", day.id)
            raise ConflictError(
                "business day was modified concurrently",
                details={"business_day_id": day.id, "expected_version": day.persisted_version},
            )

        row = self.session.get(BusinessDayRecord, day.id)
        wanted = {s.id: s for s in day.slots}
        kept = []
        for slot_row in row.slots:
            slot = wanted.pop(slot_row.id, None)
            if slot is None:
                continue
            slot_row.role_id = slot.role_id
            slot_row.name = slot.name
            slot_row.capacity = slot.capacity
            slot_row.start_at = slot.start_at
            slot_row.end_at = slot.end_at
            kept.append(slot_row)
        row.slots = kept + [_slot_row(s) for s in wanted.values()]
        self.session.flush()

    def find_by_id(self, ctx: Context, tenant_id: str, business_day_id: str, *, for_update: bool = False) -> BusinessDay:
        ctx.check()
        stmt = self._scoped(tenant_id).where(BusinessDayRecord.id == business_day_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("business day", business_day_id)
        return _to_domain(row)

    def find_by_template_and_date(self, ctx: Context, tenant_id: str, template_id: str, day: date) -> Optional[BusinessDay]:
        ctx.check()
        stmt = self._scoped(tenant_id).where(
            BusinessDayRecord.template_id == template_id, BusinessDayRecord.date == day
        )
        row = self.session.scalars(stmt).first()
        return _to_domain(row) if row else None

    def find_in_range(
        self, ctx: Context, tenant_id: str, start: date, end: date, *, template_id: Optional[str] = None,
        locked_only: bool = False,
    ) -> List[BusinessDay]:
        ctx.check()
        stmt = self._scoped(tenant_id).where(BusinessDayRecord.date >= start, BusinessDayRecord.date <= end)
        if template_id is not None:
            stmt = stmt.where(BusinessDayRecord.template_id == template_id)
        if locked_only:
            stmt = stmt.where(BusinessDayRecord.locked_at.is_not(None))
        stmt = stmt.order_by(BusinessDayRecord.date.asc(), BusinessDayRecord.id.asc())
        return [_to_domain(r) for r in self.session.scalars(stmt)]

    def existing_dates(self, ctx: Context, tenant_id: str, template_id: str, start: date, end: date) -> Set[date]:
        ctx.check()
        stmt = select(BusinessDayRecord.date).where(
            BusinessDayRecord.tenant_id == tenant_id,
            BusinessDayRecord.template_id == template_id,
            BusinessDayRecord.date >= start,
            BusinessDayRecord.date <= end,
        )
        return set(self.session.scalars(stmt))

    def delete(self, ctx: Context, tenant_id: str, business_day_id: str) -> None:
        ctx.check()
        result = self.session.execute(
            delete(BusinessDayRecord)
            .where(BusinessDayRecord.id == business_day_id, BusinessDayRecord.tenant_id == tenant_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise NotFoundError("business day", business_day_id)
        self.session.expire_all()
