from __future__ import annotations
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import NotFoundError, ValidationError
from .domain import Role
from .models import RoleRecord
from .repository import RoleRepository


def _to_domain(row: RoleRecord) -> Role:
    return Role.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        name=row.name,
        description=row.description,
        default_capacity=row.default_capacity,
        display_order=row.display_order,
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
        deleted_at=aware(row.deleted_at),
    )


class SqlRoleRepository(RoleRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, ctx: Context, role: Role) -> None:
        ctx.check()
        row = self.session.get(RoleRecord, role.id)
        if row is None:
            row = RoleRecord(id=role.id, tenant_id=role.tenant_id, created_at=role.created_at)
            self.session.add(row)
        elif row.tenant_id != role.tenant_id:
            raise NotFoundError("role", role.id)
        row.name = role.name
        row.description = role.description
        row.default_capacity = role.default_capacity
        row.display_order = role.display_order
        row.updated_at = role.updated_at
        row.deleted_at = role.deleted_at
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise ValidationError(
                "a role with this name already exists", code="DUPLICATE_ROLE_NAME", details={"name": role.name}
            )

    def find_by_id(self, ctx: Context, tenant_id: str, role_id: str) -> Role:
        ctx.check()
        stmt = select(RoleRecord).where(
            RoleRecord.id == role_id,
            RoleRecord.tenant_id == tenant_id,
            RoleRecord.deleted_at.is_(None),
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("role", role_id)
        return _to_domain(row)

    def find_by_name(self, ctx: Context, tenant_id: str, name: str) -> Optional[Role]:
        ctx.check()
        stmt = select(RoleRecord).where(
            RoleRecord.tenant_id == tenant_id,
            RoleRecord.name == name,
            RoleRecord.deleted_at.is_(None),
        )
        row = self.session.scalars(stmt).first()
        return _to_domain(row) if row else None

    def find_all(self, ctx: Context, tenant_id: str) -> List[Role]:
        ctx.check()
        stmt = (
            select(RoleRecord)
            .where(RoleRecord.tenant_id == tenant_id, RoleRecord.deleted_at.is_(None))
            .order_by(RoleRecord.display_order.asc(), RoleRecord.name.asc())
        )
        return [_to_domain(r) for r in self.session.scalars(stmt)]
