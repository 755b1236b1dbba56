from __future__ import annotations
from datetime import datetime
from typing import Iterable, List, Set

from sqlalchemy import exists, func, or_, select
from sqlalchemy.orm import Session

from core.context import Context
from core.database import aware, dialect_insert
from core.errors import NotFoundError
from .domain import Announcement, AnnouncementScope, scope_of, scope_tenant_id
from .models import AnnouncementReadRecord, AnnouncementRecord
from .repository import AnnouncementReadRepository, AnnouncementRepository


def _to_domain(row: AnnouncementRecord) -> Announcement:
    return Announcement.reconstruct(
        id=row.id,
        scope=scope_of(row.tenant_id),
        title=row.title,
        body=row.body,
        published_at=aware(row.published_at),
        created_at=aware(row.created_at),
        updated_at=aware(row.updated_at),
        deleted_at=aware(row.deleted_at),
    )


def _in_scope(scope: AnnouncementScope):
    tenant_id = scope_tenant_id(scope)
    if tenant_id is None:
        return AnnouncementRecord.tenant_id.is_(None)
    return AnnouncementRecord.tenant_id == tenant_id


def _visible_published(tenant_id: str, now: datetime):
    return (
        or_(AnnouncementRecord.tenant_id.is_(None), AnnouncementRecord.tenant_id == tenant_id),
        AnnouncementRecord.deleted_at.is_(None),
        AnnouncementRecord.published_at <= now,
    )


def _newest_first(stmt):
    return stmt.order_by(AnnouncementRecord.published_at.desc(), AnnouncementRecord.id.desc())


class SqlAnnouncementRepository(AnnouncementRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, ctx: Context, announcement: Announcement) -> None:
        ctx.check()
        row = self.session.get(AnnouncementRecord, announcement.id)
        if row is None:
            row = AnnouncementRecord(
                id=announcement.id, tenant_id=announcement.tenant_id, created_at=announcement.created_at
            )
            self.session.add(row)
        elif row.tenant_id != announcement.tenant_id:
            raise NotFoundError("announcement", announcement.id)
        row.title = announcement.title
        row.body = announcement.body
        row.published_at = announcement.published_at
        row.updated_at = announcement.updated_at
        row.deleted_at = announcement.deleted_at
        self.session.flush()

    def find_by_id(self, ctx: Context, scope: AnnouncementScope, announcement_id: str) -> Announcement:
        ctx.check()
        stmt = select(AnnouncementRecord).where(
            AnnouncementRecord.id == announcement_id,
            _in_scope(scope),
            AnnouncementRecord.deleted_at.is_(None),
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("announcement", announcement_id)
        return _to_domain(row)

    def find_all(self, ctx: Context, scope: AnnouncementScope) -> List[Announcement]:
        ctx.check()
        stmt = select(AnnouncementRecord).where(_in_scope(scope), AnnouncementRecord.deleted_at.is_(None))
        return [_to_domain(r) for r in self.session.scalars(_newest_first(stmt))]

    def find_published_for_tenant(self, ctx: Context, tenant_id: str, now: datetime) -> List[Announcement]:
        ctx.check()
        stmt = select(AnnouncementRecord).where(*_visible_published(tenant_id, now))
        return [_to_domain(r) for r in self.session.scalars(_newest_first(stmt))]

    def find_visible_by_id(self, ctx: Context, tenant_id: str, announcement_id: str, now: datetime) -> Announcement:
        ctx.check()
        stmt = select(AnnouncementRecord).where(
            AnnouncementRecord.id == announcement_id, *_visible_published(tenant_id, now)
        )
        row = self.session.scalars(stmt).first()
        if row is None:
            raise NotFoundError("announcement", announcement_id)
        return _to_domain(row)


class SqlAnnouncementReadRepository(AnnouncementReadRepository):
    def __init__(self, session: Session):
        self.session = session

    def _insert_ignore(self, rows: List[dict]) -> int:
        if not rows:
            return 0
        stmt = (
            dialect_insert(self.session, AnnouncementReadRecord.__table__)
            .values(rows)
            .on_conflict_do_nothing(index_elements=["announcement_id", "admin_id"])
        )
        return self.session.execute(stmt).rowcount or 0

    def mark_as_read(
        self, ctx: Context, tenant_id: str, admin_id: str, announcement_id: str, read_at: datetime
    ) -> None:
        ctx.check()
        self._insert_ignore(
            [{"announcement_id": announcement_id, "admin_id": admin_id, "tenant_id": tenant_id, "read_at": read_at}]
        )

    def mark_many_as_read(
        self, ctx: Context, tenant_id: str, admin_id: str, announcement_ids: Iterable[str], read_at: datetime
    ) -> int:
        ctx.check()
        return self._insert_ignore(
            [
                {"announcement_id": a_id, "admin_id": admin_id, "tenant_id": tenant_id, "read_at": read_at}
                for a_id in dict.fromkeys(announcement_ids)
            ]
        )

    def read_ids(self, ctx: Context, tenant_id: str, admin_id: str) -> Set[str]:
        ctx.check()
        stmt = select(AnnouncementReadRecord.announcement_id).where(
            AnnouncementReadRecord.tenant_id == tenant_id,
            AnnouncementReadRecord.admin_id == admin_id,
        )
        return set(self.session.scalars(stmt))

    def count_unread(self, ctx: Context, tenant_id: str, admin_id: str, now: datetime) -> int:
        ctx.check()
        already_read = exists().where(
            AnnouncementReadRecord.announcement_id == AnnouncementRecord.id,
            AnnouncementReadRecord.admin_id == admin_id,
            AnnouncementReadRecord.tenant_id == tenant_id,
        )
        stmt = (
            select(func.count())
            .select_from(AnnouncementRecord)
            .where(*_visible_published(tenant_id, now), ~already_read)
        )
        return int(self.session.scalar(stmt) or 0)
