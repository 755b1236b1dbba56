from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from core.context import Context
from .domain import Attendance


class AttendanceRepository(ABC):

    @abstractmethod
    def upsert(self, ctx: Context, attendance: Attendance) -> Attendance:
        """
        Atomically insert or overwrite the record for (business day, member).

        Last write wins. Returns the stored record, which keeps the id of the
        first submission.
        """

    @abstractmethod
    def find_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> List[Attendance]:
        ...

    @abstractmethod
    def find_by_day_and_member(self, ctx: Context, tenant_id: str, business_day_id: str, member_id: str) -> Attendance:
        """Raises NotFoundError when the member has not responded."""
