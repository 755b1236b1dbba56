from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock frozen at a given instant; advance() moves it forward."""

    def __init__(self, instant: datetime):
        self._instant = _utc(instant)

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = _utc(instant)

    def advance(self, delta: timedelta) -> None:
        self._instant = self._instant + delta


def _utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("clock instants must be timezone-aware")
    return dt.astimezone(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """Normalize an instant to UTC; naive values are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
