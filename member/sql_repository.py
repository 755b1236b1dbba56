from __future__ import annotations
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware
from core.errors import NotFoundError
from .domain import Member
from .models import MemberRecord, MemberRoleRecord
from .repository import MemberRepository


def _to_domain(row: MemberRecord) -> Member:
    return Member.reconstruct(
        id=row.id,
        tenant_id=row.tenant_id,
        display_name=row.display_name,
        email=row.email,
        role_ids=[link.role_id for link in row.role_links],
        is_active=row.is_active,
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
        deleted_at=aware(row.deleted_at),
    )


class SqlMemberRepository(MemberRepository):
    def __init__(self, session: Session):
        self.session = session

    def _live(self, tenant_id: str):
        return select(MemberRecord).where(
            MemberRecord.tenant_id == tenant_id,
            MemberRecord.deleted_at.is_(None),
        )

    def save(self, ctx: Context, member: Member) -> None:
        ctx.check()
        row = self.session.get(MemberRecord, member.id)
        if row is None:
            row = MemberRecord(id=member.id, tenant_id=member.tenant_id, created_at=member.created_at)
            self.session.add(row)
        elif row.tenant_id != member.tenant_id:
            raise NotFoundError("member", member.id)
        row.display_name = member.display_name
        row.email = member.email
        row.is_active = member.is_active
        row.updated_at = member.updated_at
        row.deleted_at = member.deleted_at

        current = {link.role_id for link in row.role_links}
        wanted = set(member.role_ids)
        row.role_links = [link for link in row.role_links if link.role_id in wanted] + [
            MemberRoleRecord(role_id=role_id) for role_id in sorted(wanted - current)
        ]
        self.session.flush()

    def find_by_id(self, ctx: Context, tenant_id: str, member_id: str) -> Member:
        ctx.check()
        row = self.session.scalars(self._live(tenant_id).where(MemberRecord.id == member_id)).first()
        if row is None:
            raise NotFoundError("member", member_id)
        return _to_domain(row)

    def find_by_ids(self, ctx: Context, tenant_id: str, member_ids: Iterable[str]) -> Dict[str, Member]:
        ctx.check()
        ids = set(member_ids)
        if not ids:
            return {}
        rows = self.session.scalars(self._live(tenant_id).where(MemberRecord.id.in_(ids)))
        return {row.id: _to_domain(row) for row in rows}

    def find_all(self, ctx: Context, tenant_id: str, *, include_inactive: bool = False) -> List[Member]:
        ctx.check()
        stmt = self._live(tenant_id)
        if not include_inactive:
            stmt = stmt.where(MemberRecord.is_active.is_(True))
        stmt = stmt.order_by(MemberRecord.display_name.asc())
        return [_to_domain(r) for r in self.session.scalars(stmt)]
