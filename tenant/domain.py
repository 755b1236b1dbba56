from __future__ import annotations
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.errors import ValidationError
from core.ids import new_id

NAME_MAX_LENGTH = 255


def _validate(name: str, timezone: str) -> None:
    if not name or not name.strip():
        raise ValidationError("tenant name is required", code="TENANT_NAME_REQUIRED")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"tenant name must be at most {NAME_MAX_LENGTH} characters", code="TENANT_NAME_TOO_LONG"
        )
    try:
        ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"unknown timezone: {timezone}", code="INVALID_TIMEZONE")


class Tenant:
    """An isolated organization; the root scope of every other aggregate."""

    __slots__ = ("_id", "_name", "_timezone", "_created_at", "_updated_at", "_deleted_at")

    def __init__(
        self,
        *,
        id: str,
        name: str,
        timezone: str,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime],
    ):
        self._id = id
        self._name = name
        self._timezone = timezone
        self._created_at = created_at
        self._updated_at = updated_at
        self._deleted_at = deleted_at

    @classmethod
    def create(cls, now: datetime, name: str, timezone: str) -> "Tenant":
        _validate(name, timezone)
        return cls(
            id=new_id(),
            name=name.strip(),
            timezone=timezone,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Tenant":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self._timezone)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    @property
    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def update(self, now: datetime, *, name: str, timezone: str) -> None:
        _validate(name, timezone)
        self._name = name.strip()
        self._timezone = timezone
        self._updated_at = now

    def delete(self, now: datetime) -> None:
        if self._deleted_at is None:
            self._deleted_at = now
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<Tenant(id={self._id}, name={self._name})>"
