"""
BusinessDay aggregate.

A business day realizes a template on one local calendar date and owns its
shift slots. Every mutation bumps `version`; storage only accepts a write
whose `persisted_version` still matches the stored row, which is how
concurrent finalizations of the same day are told apart.
"""
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from core.clock import as_utc
from core.errors import NotFoundError, ValidationError
from core.ids import new_id


def local_midnight(day: date, zone: ZoneInfo) -> datetime:
    """Start of `day` in `zone`, as an aware UTC instant."""
    return datetime.combine(day, time.min, tzinfo=zone).astimezone(timezone.utc)


def combine_local(day: date, at: time, zone: ZoneInfo) -> datetime:
    """`at` on `day` in `zone`, as UTC. Wall times skipped by a DST change are rejected."""
    local = datetime.combine(day, at, tzinfo=zone)
    instant = local.astimezone(timezone.utc)
    if instant.astimezone(zone).replace(tzinfo=None) != local.replace(tzinfo=None):
        raise ValidationError(
            "local time does not exist in the tenant timezone on this date",
            code="NONEXISTENT_LOCAL_TIME",
            details={"date": day.isoformat(), "time": at.isoformat(), "timezone": str(zone)},
        )
    return instant


def default_response_deadline(day: date, zone: ZoneInfo, hours: int) -> datetime:
    return local_midnight(day, zone) - timedelta(hours=hours)


class ShiftSlot:
    """A role-bound, capacity-bound time window within a business day."""

    __slots__ = ("_id", "_business_day_id", "_role_id", "_name", "_capacity", "_start_at", "_end_at")

    def __init__(
        self,
        *,
        id: str,
        business_day_id: str,
        role_id: str,
        name: str,
        capacity: int,
        start_at: datetime,
        end_at: datetime,
    ):
        self._id = id
        self._business_day_id = business_day_id
        self._role_id = role_id
        self._name = name
        self._capacity = capacity
        self._start_at = start_at
        self._end_at = end_at

    @classmethod
    def reconstruct(cls, **fields) -> "ShiftSlot":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def business_day_id(self) -> str:
        return self._business_day_id

    @property
    def role_id(self) -> str:
        return self._role_id

    @property
    def name(self) -> str:
        return self._name

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def start_at(self) -> datetime:
        return self._start_at

    @property
    def end_at(self) -> datetime:
        return self._end_at

    def overlaps(self, other: "ShiftSlot") -> bool:
        return self._start_at < other._end_at and other._start_at < self._end_at

    def __repr__(self) -> str:
        return f"<ShiftSlot(id={self._id}, role_id={self._role_id}, {self._start_at}..{self._end_at})>"


class BusinessDay:
    __slots__ = (
        "_id", "_tenant_id", "_template_id", "_date", "_response_deadline", "_locked_at",
        "_version", "_persisted_version", "_slots", "_created_at", "_updated_at",
    )

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        template_id: str,
        date: date,
        response_deadline: datetime,
        locked_at: Optional[datetime],
        version: int,
        slots: Iterable[ShiftSlot],
        created_at: datetime,
        updated_at: datetime,
        persisted_version: Optional[int] = None,
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._template_id = template_id
        self._date = date
        self._response_deadline = response_deadline
        self._locked_at = locked_at
        self._version = version
        self._persisted_version = persisted_version
        self._slots: List[ShiftSlot] = list(slots)
        self._created_at = created_at
        self._updated_at = updated_at

    @classmethod
    def create(
        cls,
        now: datetime,
        tenant_id: str,
        template_id: str,
        day: date,
        zone: ZoneInfo,
        response_deadline: datetime,
        slots: Iterable[Tuple[str, str, int, time, time]],
    ) -> "BusinessDay":
        """
        Build a new open business day.

        `slots` are (name, role_id, capacity, start_time, end_time) entries,
        combined with `day` in the tenant's zone.
        """
        if day < now.astimezone(zone).date():
            raise ValidationError(
                "business day date is in the past",
                code="BUSINESS_DAY_IN_PAST",
                details={"date": day.isoformat()},
            )
        entries = list(slots)
        if not entries:
            raise ValidationError("template has no shift slots", code="TEMPLATE_HAS_NO_SLOTS")
        bd = cls(
            id=new_id(),
            tenant_id=tenant_id,
            template_id=template_id,
            date=day,
            response_deadline=as_utc(response_deadline),
            locked_at=None,
            version=1,
            slots=(),
            created_at=now,
            updated_at=now,
        )
        for name, role_id, capacity, start_time, end_time in entries:
            bd._slots.append(
                bd._build_slot(name, role_id, capacity, combine_local(day, start_time, zone), combine_local(day, end_time, zone), zone)
            )
        return bd

    @classmethod
    def reconstruct(cls, **fields) -> "BusinessDay":
        fields.setdefault("persisted_version", fields["version"])
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def template_id(self) -> str:
        return self._template_id

    @property
    def date(self) -> date:
        return self._date

    @property
    def response_deadline(self) -> datetime:
        return self._response_deadline

    @property
    def locked_at(self) -> Optional[datetime]:
        return self._locked_at

    @property
    def is_locked(self) -> bool:
        return self._locked_at is not None

    @property
    def version(self) -> int:
        return self._version

    @property
    def persisted_version(self) -> Optional[int]:
        """Version as last read from storage; None until first saved."""
        return self._persisted_version

    @property
    def slots(self) -> Tuple[ShiftSlot, ...]:
        return tuple(self._slots)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def slot(self, slot_id: str) -> ShiftSlot:
        for s in self._slots:
            if s.id == slot_id:
                return s
        raise NotFoundError("shift slot", slot_id)

    def has_slot(self, slot_id: str) -> bool:
        return any(s.id == slot_id for s in self._slots)

    def accepts_responses(self, now: datetime) -> bool:
        return not self.is_locked and now <= self._response_deadline

    def mark_persisted(self) -> None:
        self._persisted_version = self._version

    # ---- mutations ----

    def _touch(self, now: datetime) -> None:
        self._version += 1
        self._updated_at = now

    def _ensure_open(self) -> None:
        if self.is_locked:
            raise ValidationError(
                "business day is locked", code="BUSINESS_DAY_LOCKED", details={"business_day_id": self._id}
            )

    def _build_slot(
        self, name: str, role_id: str, capacity: int, start_at: datetime, end_at: datetime, zone: ZoneInfo,
        slot_id: Optional[str] = None,
    ) -> ShiftSlot:
        if not name or not name.strip():
            raise ValidationError("slot name is required", code="SLOT_NAME_REQUIRED")
        if capacity < 1:
            raise ValidationError("capacity must be at least 1", code="INVALID_CAPACITY", details={"slot": name})
        if start_at.tzinfo is None or end_at.tzinfo is None:
            raise ValidationError("slot times must be timezone-aware", code="INVALID_TIME_WINDOW")
        if start_at >= end_at:
            raise ValidationError(
                "slot start must be before its end", code="INVALID_TIME_WINDOW", details={"slot": name}
            )
        day_start = local_midnight(self._date, zone)
        day_end = local_midnight(self._date + timedelta(days=1), zone)
        if start_at < day_start or end_at > day_end:
            raise ValidationError(
                "slot window must fall within the business day",
                code="SLOT_OUTSIDE_DAY",
                details={"slot": name, "date": self._date.isoformat()},
            )
        return ShiftSlot(
            id=slot_id or new_id(),
            business_day_id=self._id,
            role_id=role_id,
            name=name.strip(),
            capacity=capacity,
            start_at=start_at.astimezone(timezone.utc),
            end_at=end_at.astimezone(timezone.utc),
        )

    def add_slot(
        self, now: datetime, zone: ZoneInfo, *, name: str, role_id: str, capacity: int, start_at: datetime, end_at: datetime
    ) -> ShiftSlot:
        self._ensure_open()
        slot = self._build_slot(name, role_id, capacity, start_at, end_at, zone)
        self._slots.append(slot)
        self._touch(now)
        return slot

    def update_slot(
        self,
        now: datetime,
        zone: ZoneInfo,
        slot_id: str,
        *,
        name: Optional[str] = None,
        role_id: Optional[str] = None,
        capacity: Optional[int] = None,
        start_at: Optional[datetime] = None,
        end_at: Optional[datetime] = None,
    ) -> ShiftSlot:
        self._ensure_open()
        current = self.slot(slot_id)
        updated = self._build_slot(
            current.name if name is None else name,
            current.role_id if role_id is None else role_id,
            current.capacity if capacity is None else capacity,
            current.start_at if start_at is None else start_at,
            current.end_at if end_at is None else end_at,
            zone,
            slot_id=current.id,
        )
        self._slots = [updated if s.id == slot_id else s for s in self._slots]
        self._touch(now)
        return updated

    def remove_slot(self, now: datetime, slot_id: str) -> None:
        self._ensure_open()
        self.slot(slot_id)
        if len(self._slots) == 1:
            raise ValidationError("a business day needs at least one shift slot", code="LAST_SLOT")
        self._slots = [s for s in self._slots if s.id != slot_id]
        self._touch(now)

    def set_response_deadline(self, now: datetime, deadline: datetime) -> None:
        self._ensure_open()
        self._response_deadline = as_utc(deadline)
        self._touch(now)

    def lock(self, now: datetime) -> None:
        """Freeze the day. Locking a locked day changes nothing."""
        if self.is_locked:
            return
        self._locked_at = now
        self._touch(now)

    def reopen(self, now: datetime) -> bool:
        if not self.is_locked:
            return False
        self._locked_at = None
        self._touch(now)
        return True

    def __repr__(self) -> str:
        return f"<BusinessDay(id={self._id}, tenant_id={self._tenant_id}, date={self._date}, locked={self.is_locked})>"
