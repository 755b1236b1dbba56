"""Storage contracts for announcements and per-admin read state."""
from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Set

from core.context import Context
from .domain import Announcement, AnnouncementScope


class AnnouncementRepository(ABC):

    @abstractmethod
    def save(self, ctx: Context, announcement: Announcement) -> None:
        """Upsert by id. NotFoundError if the stored row has a different scope."""

    @abstractmethod
    def find_by_id(self, ctx: Context, scope: AnnouncementScope, announcement_id: str) -> Announcement:
        """
        Load a non-deleted announcement owned by exactly `scope`.

        A tenant scope never resolves a global announcement or another
        tenant's, and the global scope never resolves a tenant's.

        Raises:
            NotFoundError: otherwise
        """

    @abstractmethod
    def find_all(self, ctx: Context, scope: AnnouncementScope) -> List[Announcement]:
        """Non-deleted announcements of `scope`, scheduled ones included, newest first."""

    @abstractmethod
    def find_published_for_tenant(self, ctx: Context, tenant_id: str, now: datetime) -> List[Announcement]:
        """Global and tenant announcements published at `now`, newest first."""

    @abstractmethod
    def find_visible_by_id(self, ctx: Context, tenant_id: str, announcement_id: str, now: datetime) -> Announcement:
        """Raises NotFoundError unless the announcement is published and visible to the tenant."""


class AnnouncementReadRepository(ABC):

    @abstractmethod
    def mark_as_read(
        self, ctx: Context, tenant_id: str, admin_id: str, announcement_id: str, read_at: datetime
    ) -> None:
        """Idempotent: a second mark for the same pair is ignored."""

    @abstractmethod
    def mark_many_as_read(
        self, ctx: Context, tenant_id: str, admin_id: str, announcement_ids: Iterable[str], read_at: datetime
    ) -> int:
        """Returns how many new read records were written."""

    @abstractmethod
    def read_ids(self, ctx: Context, tenant_id: str, admin_id: str) -> Set[str]:
        ...

    @abstractmethod
    def count_unread(self, ctx: Context, tenant_id: str, admin_id: str, now: datetime) -> int:
        """Visible, published, non-deleted announcements the admin has not read."""
