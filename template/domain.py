"""
Event templates: a recurrence rule plus the blueprint of shift slots that a
business day realizes. Edits only affect business days created afterwards.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple

from core.errors import ValidationError
from core.ids import new_id

NAME_MAX_LENGTH = 255


class RecurrenceKind(str, Enum):
    NONE = "none"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"

    @classmethod
    def parse(cls, value: str) -> "RecurrenceKind":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"unknown recurrence: {value}", code="INVALID_RECURRENCE")


@dataclass(frozen=True)
class Recurrence:
    kind: RecurrenceKind
    start_date: date
    weekday: int  # 0=Mon .. 6=Sun

    @classmethod
    def of(cls, kind: str, start_date: date, weekday: Optional[int] = None) -> "Recurrence":
        parsed = RecurrenceKind.parse(kind)
        if weekday is None:
            weekday = start_date.weekday()
        if not 0 <= weekday <= 6:
            raise ValidationError("weekday must be between 0 and 6", code="INVALID_WEEKDAY")
        if parsed is RecurrenceKind.NONE and weekday != start_date.weekday():
            raise ValidationError("a one-off event falls on its start date", code="INVALID_WEEKDAY")
        return cls(parsed, start_date, weekday)

    def _first(self) -> date:
        return self.start_date + timedelta(days=(self.weekday - self.start_date.weekday()) % 7)

    def occurrences(self, start: date, end: date) -> Iterator[date]:
        """Dates in [start, end] on which the event takes place."""
        if self.kind is RecurrenceKind.NONE:
            if start <= self.start_date <= end:
                yield self.start_date
            return

        step = 7 if self.kind is RecurrenceKind.WEEKLY else 14
        cur = self._first()
        if cur < start:
            periods = -(-(start - cur).days // step)
            cur += timedelta(days=periods * step)
        while cur <= end:
            yield cur
            cur += timedelta(days=step)

    def occurs_on(self, day: date) -> bool:
        return any(True for _ in self.occurrences(day, day))


@dataclass(frozen=True)
class SlotBlueprint:
    name: str
    role_id: str
    start_time: time
    end_time: time
    capacity: Optional[int] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("slot name is required", code="SLOT_NAME_REQUIRED")
        if self.start_time >= self.end_time:
            raise ValidationError(
                "slot start time must be before its end time",
                code="INVALID_TIME_WINDOW",
                details={"slot": self.name},
            )
        if self.capacity is not None and self.capacity < 1:
            raise ValidationError("capacity must be at least 1", code="INVALID_CAPACITY", details={"slot": self.name})


def _validate(name: str, response_deadline_hours: int) -> None:
    if not name or not name.strip():
        raise ValidationError("template name is required", code="TEMPLATE_NAME_REQUIRED")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"template name must be at most {NAME_MAX_LENGTH} characters", code="TEMPLATE_NAME_TOO_LONG"
        )
    if response_deadline_hours < 0:
        raise ValidationError("response deadline hours must not be negative", code="INVALID_DEADLINE")


class Template:
    __slots__ = (
        "_id", "_tenant_id", "_name", "_description", "_recurrence", "_response_deadline_hours",
        "_slots", "_created_at", "_updated_at", "_deleted_at",
    )

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        name: str,
        description: str,
        recurrence: Recurrence,
        response_deadline_hours: int,
        slots: Iterable[SlotBlueprint],
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime],
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._name = name
        self._description = description
        self._recurrence = recurrence
        self._response_deadline_hours = response_deadline_hours
        self._slots = tuple(slots)
        self._created_at = created_at
        self._updated_at = updated_at
        self._deleted_at = deleted_at

    @classmethod
    def create(
        cls,
        now: datetime,
        tenant_id: str,
        name: str,
        recurrence: Recurrence,
        slots: Iterable[SlotBlueprint],
        *,
        description: str = "",
        response_deadline_hours: int = 24,
    ) -> "Template":
        _validate(name, response_deadline_hours)
        return cls(
            id=new_id(),
            tenant_id=tenant_id,
            name=name.strip(),
            description=description or "",
            recurrence=recurrence,
            response_deadline_hours=response_deadline_hours,
            slots=slots,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Template":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def recurrence(self) -> Recurrence:
        return self._recurrence

    @property
    def response_deadline_hours(self) -> int:
        return self._response_deadline_hours

    @property
    def slots(self) -> Tuple[SlotBlueprint, ...]:
        return self._slots

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

    def role_ids(self) -> List[str]:
        return list(dict.fromkeys(s.role_id for s in self._slots))

    def update(
        self,
        now: datetime,
        *,
        name: str,
        description: str,
        recurrence: Recurrence,
        response_deadline_hours: int,
        slots: Iterable[SlotBlueprint],
    ) -> None:
        _validate(name, response_deadline_hours)
        self._name = name.strip()
        self._description = description or ""
        self._recurrence = recurrence
        self._response_deadline_hours = response_deadline_hours
        self._slots = tuple(slots)
        self._updated_at = now

    def delete(self, now: datetime) -> None:
        if self._deleted_at is None:
            self._deleted_at = now
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<Template(id={self._id}, tenant_id={self._tenant_id}, name={self._name})>"
