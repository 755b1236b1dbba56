"""
Per-call cancellation and timeout.

A Context travels with every repository call. Adapters call `check()` before
touching storage, and the unit of work checks it before committing, so a
cancelled or expired call never leaves a partial write behind.
"""
from __future__ import annotations
from datetime import datetime, timedelta
from typing import Optional

from core.clock import Clock, SystemClock
from core.errors import CanceledError


class Context:
    def __init__(self, deadline: Optional[datetime] = None, clock: Optional[Clock] = None):
        self._deadline = deadline
        self._clock = clock or SystemClock()
        self._cancelled = False

    @classmethod
    def background(cls) -> "Context":
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float, clock: Optional[Clock] = None) -> "Context":
        clock = clock or SystemClock()
        return cls(deadline=clock.now() + timedelta(seconds=seconds), clock=clock)

    @property
    def deadline(self) -> Optional[datetime]:
        return self._deadline

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def done(self) -> bool:
        if self._cancelled:
            return True
        return self._deadline is not None and self._clock.now() >= self._deadline

    def check(self) -> None:
        if self._cancelled:
            raise CanceledError("operation cancelled by caller")
        if self._deadline is not None and self._clock.now() >= self._deadline:
            raise CanceledError("operation deadline exceeded", details={"deadline": self._deadline.isoformat()})
