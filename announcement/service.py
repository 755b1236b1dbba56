import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from core.unit_of_work import UnitOfWork
from .domain import Announcement, AnnouncementScope, scope_tenant_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnnouncementView:
    """An announcement as one admin sees it."""

    id: str
    tenant_id: Optional[str]
    title: str
    body: str
    published_at: datetime
    created_at: datetime
    is_read: bool

    @classmethod
    def of(cls, announcement: Announcement, is_read: bool) -> "AnnouncementView":
        return cls(
            id=announcement.id,
            tenant_id=announcement.tenant_id,
            title=announcement.title,
            body=announcement.body,
            published_at=announcement.published_at,
            created_at=announcement.created_at,
            is_read=is_read,
        )


def _ensure_tenant(uow: UnitOfWork, scope: AnnouncementScope) -> None:
    tenant_id = scope_tenant_id(scope)
    if tenant_id is not None:
        uow.tenants.find_by_id(uow.ctx, tenant_id)


def create_announcement(
    uow: UnitOfWork,
    scope: AnnouncementScope,
    title: str,
    body: str,
    published_at: Optional[datetime] = None,
) -> Announcement:
    _ensure_tenant(uow, scope)
    announcement = Announcement.create(uow.clock.now(), scope, title, body, published_at)
    uow.announcements.save(uow.ctx, announcement)
    uow.commit()
    logger.info(
        "announcement created",
        extra={"announcement_id": announcement.id, "tenant_id": announcement.tenant_id},
    )
    return announcement


def update_announcement(
    uow: UnitOfWork,
    scope: AnnouncementScope,
    announcement_id: str,
    *,
    title: Optional[str] = None,
    body: Optional[str] = None,
    published_at: Optional[datetime] = None,
) -> Announcement:
    announcement = uow.announcements.find_by_id(uow.ctx, scope, announcement_id)
    announcement.update(
        uow.clock.now(),
        title=announcement.title if title is None else title,
        body=announcement.body if body is None else body,
        published_at=announcement.published_at if published_at is None else published_at,
    )
    uow.announcements.save(uow.ctx, announcement)
    uow.commit()
    logger.info(
        "announcement updated",
        extra={"announcement_id": announcement.id, "tenant_id": announcement.tenant_id},
    )
    return announcement


def delete_announcement(uow: UnitOfWork, scope: AnnouncementScope, announcement_id: str) -> None:
    announcement = uow.announcements.find_by_id(uow.ctx, scope, announcement_id)
    announcement.delete(uow.clock.now())
    uow.announcements.save(uow.ctx, announcement)
    uow.commit()
    logger.info(
        "announcement deleted",
        extra={"announcement_id": announcement.id, "tenant_id": announcement.tenant_id},
    )


def list_scope_announcements(uow: UnitOfWork, scope: AnnouncementScope) -> List[Announcement]:
    """Everything an author manages in a scope, including scheduled posts."""
    return uow.announcements.find_all(uow.ctx, scope)


def list_announcements(uow: UnitOfWork, tenant_id: str, admin_id: str) -> List[AnnouncementView]:
    now = uow.clock.now()
    published = uow.announcements.find_published_for_tenant(uow.ctx, tenant_id, now)
    read = uow.announcement_reads.read_ids(uow.ctx, tenant_id, admin_id)
    return [AnnouncementView.of(a, a.id in read) for a in published]


def mark_as_read(uow: UnitOfWork, tenant_id: str, admin_id: str, announcement_id: str) -> None:
    now = uow.clock.now()
    uow.announcements.find_visible_by_id(uow.ctx, tenant_id, announcement_id, now)
    uow.announcement_reads.mark_as_read(uow.ctx, tenant_id, admin_id, announcement_id, now)
    uow.commit()
    logger.info(
        "announcement read",
        extra={"tenant_id": tenant_id, "admin_id": admin_id, "announcement_id": announcement_id},
    )


def mark_all_as_read(uow: UnitOfWork, tenant_id: str, admin_id: str) -> int:
    now = uow.clock.now()
    visible = uow.announcements.find_published_for_tenant(uow.ctx, tenant_id, now)
    written = uow.announcement_reads.mark_many_as_read(
        uow.ctx, tenant_id, admin_id, [a.id for a in visible], now
    )
    uow.commit()
    logger.info(
        "announcements marked read", extra={"tenant_id": tenant_id, "admin_id": admin_id, "count": written}
    )
    return written


def get_unread_count(uow: UnitOfWork, tenant_id: str, admin_id: str) -> int:
    return uow.announcement_reads.count_unread(uow.ctx, tenant_id, admin_id, uow.clock.now())

