"""
Unit of Work for one use-case invocation.

Holds the session, the tenant-scoped repositories, the clock and the request
context. Services call `commit()` once all validation has passed; anything
that escapes the `with` block is rolled back.
"""
from __future__ import annotations
import logging
from typing import Callable, Generator, Optional

from sqlalchemy.orm import Session

from core.clock import Clock, SystemClock
from core.config_loader import settings
from core.context import Context
from core.database import SessionLocal
from core.errors import CanceledError

from tenant.sql_repository import SqlTenantRepository
from role.sql_repository import SqlRoleRepository
from member.sql_repository import SqlMemberRepository
from template.sql_repository import SqlTemplateRepository
from businessday.sql_repository import SqlBusinessDayRepository
from attendance.sql_repository import SqlAttendanceRepository
from adjustment.sql_repository import SqlAdjustmentRepository
from announcement.sql_repository import SqlAnnouncementRepository, SqlAnnouncementReadRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        *,
        clock: Optional[Clock] = None,
        ctx: Optional[Context] = None,
    ):
        self._session_factory = session_factory
        self.clock: Clock = clock or SystemClock()
        self.ctx: Context = ctx or Context.background()
        self.session: Optional[Session] = None

    def open(self) -> "UnitOfWork":
        if self.session is not None:
            raise RuntimeError("UnitOfWork is already active")
        self.session = self._session_factory()
        self.tenants = SqlTenantRepository(self.session)
        self.roles = SqlRoleRepository(self.session)
        self.members = SqlMemberRepository(self.session)
        self.templates = SqlTemplateRepository(self.session)
        self.business_days = SqlBusinessDayRepository(self.session)
        self.attendances = SqlAttendanceRepository(self.session)
        self.adjustments = SqlAdjustmentRepository(self.session)
        self.announcements = SqlAnnouncementRepository(self.session)
        self.announcement_reads = SqlAnnouncementReadRepository(self.session)
        return self

    def __enter__(self) -> "UnitOfWork":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.session is None:
            return
        try:
            if exc_type is not None:
                logger.debug("rolling back unit of work: %s", exc_val)
                self.rollback()
        finally:
            self.close()

    def commit(self) -> None:
        if self.session is None:
            raise RuntimeError("No active session to commit")
        try:
            self.ctx.check()
        except CanceledError:
            self.session.rollback()
            raise
        self.session.commit()

    def rollback(self) -> None:
        if self.session is not None:
            self.session.rollback()

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None


def get_uow() -> Generator[UnitOfWork, None, None]:
    clock = SystemClock()
    ctx = Context.with_timeout(settings.REQUEST_TIMEOUT_SECONDS, clock=clock)
    with UnitOfWork(clock=clock, ctx=ctx) as uow:
        yield uow
