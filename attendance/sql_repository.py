from __future__ import annotations
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware, dialect_insert
from core.errors import NotFoundError
from .domain import Attendance
from .models import AttendanceRecord
from .repository import AttendanceRepository


def _to_domain(row: AttendanceRecord) -> Attendance:
    return Attendance.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        business_day_id=row.business_day_id,
        member_id=row.member_id,
        status=row.status,
        note=row.note,
        submitted_at=aware(row.submitted_at),
    )


class SqlAttendanceRepository(AttendanceRepository):
    def __init__(self, session: Session):
        self.session = session

    def upsert(self, ctx: Context, attendance: Attendance) -> Attendance:
        ctx.check()
        stmt = dialect_insert(self.session, AttendanceRecord.__table__).values(
            id=attendance.id,
            tenant_id=attendance.tenant_id,
            business_day_id=attendance.business_day_id,
            member_id=attendance.member_id,
            status=attendance.status.value,
            note=attendance.note,
            submitted_at=attendance.submitted_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["business_day_id", "member_id"],
            set_={
                "status": stmt.excluded.status,
                "note": stmt.excluded.note,
                "submitted_at": stmt.excluded.submitted_at,
            },
        )
        self.session.execute(stmt)
        return self.find_by_day_and_member(
            ctx, attendance.tenant_id, attendance.business_day_id, attendance.member_id
        )

    def find_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> List[Attendance]:
        ctx.check()
        stmt = (
            select(AttendanceRecord)
            .where(AttendanceRecord.tenant_id == tenant_id, AttendanceRecord.business_day_id == business_day_id)
            .order_by(AttendanceRecord.submitted_at.asc(), AttendanceRecord.id.asc())
        )
        return [_to_domain(r) for r in self.session.scalars(stmt)]

    def find_by_day_and_member(self, ctx: Context, tenant_id: str, business_day_id: str, member_id: str) -> Attendance:
        ctx.check()
        stmt = (
            select(AttendanceRecord)
            .where(
                AttendanceRecord.tenant_id == tenant_id,
                AttendanceRecord.business_day_id == business_day_id,
                AttendanceRecord.member_id == member_id,
            )
            .execution_options(populate_existing=True)
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("attendance", f"{business_day_id}/{member_id}")
        return _to_domain(row)
