from __future__ import annotations

from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import NotFoundError
from .domain import Tenant
from .models import TenantRecord
from .repository import TenantRepository


def _to_domain(row: TenantRecord) -> Tenant:
    return Tenant.reconstruct(
        id=row.id,
        name=row.name,
        timezone=row.timezone,
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
        deleted_at=aware(row.deleted_at),
    )


class SqlTenantRepository(TenantRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, ctx: Context, tenant: Tenant) -> None:
        ctx.check()
        row = self.session.get(TenantRecord, tenant.id)
        if row is None:
            row = TenantRecord(id=tenant.id, created_at=tenant.created_at)
            self.session.add(row)
        row.name = tenant.name
        row.timezone = tenant.timezone
        row.updated_at = tenant.updated_at
        row.deleted_at = tenant.deleted_at
        self.session.flush()

    def find_by_id(self, ctx: Context, tenant_id: str) -> Tenant:
        ctx.check()
        row = self.session.get(TenantRecord, tenant_id)
        if row is None or row.deleted_at is not None:
            raise NotFoundError("tenant", tenant_id)
        return _to_domain(row)
