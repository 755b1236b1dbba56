from __future__ import annotations
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import NotFoundError
from .domain import Recurrence, RecurrenceKind, SlotBlueprint, Template
from .models import TemplateRecord, TemplateSlotRecord
from .repository import TemplateRepository


def _to_domain(row: TemplateRecord) -> Template:
    return Template.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        name=row.name,
        description=row.description,
        recurrence=Recurrence(RecurrenceKind(row.recurrence), row.start_date, row.weekday),
        response_deadline_hours=row.response_deadline_hours,
        slots=[
            SlotBlueprint(
                name=s.name,
                role_id=s.role_id,
                start_time=s.start_time,
                end_time=s.end_time,
                capacity=s.capacity,
            )
            for s in row.slots
        ],
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
        deleted_at=aware(row.deleted_at),
    )


class SqlTemplateRepository(TemplateRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, ctx: Context, template: Template) -> None:
        ctx.check()
        row = self.session.get(TemplateRecord, template.id)
        if row is None:
            row = TemplateRecord(id=template.id, tenant_id=template.tenant_id, created_at=template.created_at)
            self.session.add(row)
        elif row.tenant_id != template.tenant_id:
            raise NotFoundError("template", template.id)
        row.name = template.name
        row.description = template.description
        row.recurrence = template.recurrence.kind.value
        row.start_date = template.recurrence.start_date
        row.weekday = template.recurrence.weekday
        row.response_deadline_hours = template.response_deadline_hours
        row.updated_at = template.updated_at
        row.deleted_at = template.deleted_at
        row.slots = [
            TemplateSlotRecord(
                position=i,
                name=s.name,
                role_id=s.role_id,
                start_time=s.start_time,
                end_time=s.end_time,
                capacity=s.capacity,
            )
            for i, s in enumerate(template.slots)
        ]
        self.session.flush()

    def find_by_id(self, ctx: Context, tenant_id: str, template_id: str) -> Template:
        ctx.check()
        stmt = select(TemplateRecord).where(
            TemplateRecord.id == template_id,
            TemplateRecord.tenant_id == tenant_id,
            TemplateRecord.deleted_at.is_(None),
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("template", template_id)
        return _to_domain(row)

    def find_all(self, ctx: Context, tenant_id: str) -> List[Template]:
        ctx.check()
        stmt = (
            select(TemplateRecord)
            .where(TemplateRecord.tenant_id == tenant_id, TemplateRecord.deleted_at.is_(None))
            .order_by(TemplateRecord.name.asc())
        )
        return [_to_domain(r) for r in self.session.scalars(stmt)]
