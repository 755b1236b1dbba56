from __future__ import annotations
from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import NotFoundError
from .domain import Assignment, ShiftAdjustment
from .models import ShiftAdjustmentRecord, ShiftAssignmentRecord
from .repository import AdjustmentRepository


def _to_domain(row: ShiftAdjustmentRecord) -> ShiftAdjustment:
    return ShiftAdjustment.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        business_day_id=row.business_day_id,
        assignments=[Assignment(a.shift_slot_id, a.member_id) for a in row.assignments],
        created_by=row.created_by,
        created_at=aware(row.created_at),
    )


class SqlAdjustmentRepository(AdjustmentRepository):
    def __init__(self, session: Session):
        self.session = session

    def replace(self, ctx: Context, adjustment: ShiftAdjustment) -> None:
        ctx.check()
        self._delete(adjustment.tenant_id, adjustment.business_day_id)
        self.session.add(
            ShiftAdjustmentRecord(
                id=adjustment.id,
                tenant_id=adjustment.tenant_id,
                business_day_id=adjustment.business_day_id,
                created_by=adjustment.created_by,
                created_at=adjustment.created_at,
                assignments=[
                    ShiftAssignmentRecord(position=i, shift_slot_id=a.shift_slot_id, member_id=a.member_id)
                    for i, a in enumerate(adjustment.assignments)
                ],
            )
        )
        self.session.flush()

    def _delete(self, tenant_id: str, business_day_id: str) -> bool:
        row = self.session.scalars(
            select(ShiftAdjustmentRecord).where(
                ShiftAdjustmentRecord.tenant_id == tenant_id,
                ShiftAdjustmentRecord.business_day_id == business_day_id,
            )
        ).first()
        if row is None:
            return False
        self.session.delete(row)
        # business_day_id is unique; the delete must reach the database before the insert
        self.session.flush()
        return True

    def find_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> ShiftAdjustment:
        ctx.check()
        stmt = select(ShiftAdjustmentRecord).where(
            ShiftAdjustmentRecord.tenant_id == tenant_id,
            ShiftAdjustmentRecord.business_day_id == business_day_id,
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("shift adjustment", business_day_id)
        return _to_domain(row)

    def find_by_days(self, ctx: Context, tenant_id: str, business_day_ids: Iterable[str]) -> Dict[str, ShiftAdjustment]:
        ctx.check()
        ids = set(business_day_ids)
        if not ids:
            return {}
        stmt = select(ShiftAdjustmentRecord).where(
            ShiftAdjustmentRecord.tenant_id == tenant_id,
            ShiftAdjustmentRecord.business_day_id.in_(ids),
        )
        return {row.business_day_id: _to_domain(row) for row in self.session.scalars(stmt)}

    def delete_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> bool:
        ctx.check()
        return self._delete(tenant_id, business_day_id)
