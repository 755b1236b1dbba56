from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Iterable

from core.context import Context
from .domain import ShiftAdjustment


class AdjustmentRepository(ABC):

    @abstractmethod
    def replace(self, ctx: Context, adjustment: ShiftAdjustment) -> None:
        """Drop whatever adjustment the day had and store this one in its place."""

    @abstractmethod
    def find_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> ShiftAdjustment:
        """Raises NotFoundError if the day has no adjustment in this tenant."""

    @abstractmethod
    def find_by_days(self, ctx: Context, tenant_id: str, business_day_ids: Iterable[str]) -> Dict[str, ShiftAdjustment]:
        ...

    @abstractmethod
    def delete_by_day(self, ctx: Context, tenant_id: str, business_day_id: str) -> bool:
        """Returns whether an adjustment was removed."""
