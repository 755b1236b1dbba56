from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional

from core.errors import ValidationError
from core.ids import new_id

NOTE_MAX_LENGTH = 500


class AttendanceStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"
    TENTATIVE = "tentative"

    @classmethod
    def parse(cls, value) -> "AttendanceStatus":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(
                f"unknown attendance status: {value}",
                code="INVALID_ATTENDANCE_STATUS",
                details={"allowed": [s.value for s in cls]},
            )


class Attendance:
    """A member's response for one business day; at most one per (day, member)."""

    __slots__ = ("_id", "_tenant_id", "_business_day_id", "_member_id", "_status", "_note", "_submitted_at")

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        business_day_id: str,
        member_id: str,
        status: AttendanceStatus,
        note: Optional[str],
        submitted_at: datetime,
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._business_day_id = business_day_id
        self._member_id = member_id
        self._status = status
        self._note = note
        self._submitted_at = submitted_at

    @classmethod
    def create(
        cls,
        now: datetime,
        tenant_id: str,
        business_day_id: str,
        member_id: str,
        status,
        note: Optional[str] = None,
    ) -> "Attendance":
        parsed = AttendanceStatus.parse(status)
        if note is not None and len(note) > NOTE_MAX_LENGTH:
            raise ValidationError(f"note must be at most {NOTE_MAX_LENGTH} characters", code="NOTE_TOO_LONG")
        return cls(
            id=new_id(),
            tenant_id=tenant_id,
            business_day_id=business_day_id,
            member_id=member_id,
            status=parsed,
            note=note or None,
            submitted_at=now,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Attendance":
        fields["status"] = AttendanceStatus(fields["status"])
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def business_day_id(self) -> str:
        return self._business_day_id

    @property
    def member_id(self) -> str:
        return self._member_id

    @property
    def status(self) -> AttendanceStatus:
        return self._status

    @property
    def note(self) -> Optional[str]:
        return self._note

    @property
    def submitted_at(self) -> datetime:
        return self._submitted_at

    @property
    def is_available(self) -> bool:
        return self._status is AttendanceStatus.AVAILABLE

    def __repr__(self) -> str:
        return f"<Attendance(business_day_id={self._business_day_id}, member_id={self._member_id}, status={self._status.value})>"
