from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional, Set

from core.context import Context
from .domain import BusinessDay


class BusinessDayRepository(ABC):
    """Storage contract for business days and the shift slots they own."""

    @abstractmethod
    def save(self, ctx: Context, day: BusinessDay) -> None:
        """
        Insert a new day or write back a loaded one.

        Updates are compare-and-set on the version the day was loaded with.

        Raises:
            ConflictError: the stored version moved on since the day was loaded
            NotFoundError: the id belongs to another tenant or no longer exists
            ValidationError: a day already exists for the same template and date
        """

    @abstractmethod
    def find_by_id(self, ctx: Context, tenant_id: str, business_day_id: str, *, for_update: bool = False) -> BusinessDay:
        """
        Load one day with its slots.

        With `for_update`, the row stays locked until the transaction ends on
        backends that support SELECT .. FOR UPDATE.
        """

    @abstractmethod
    def find_by_template_and_date(self, ctx: Context, tenant_id: str, template_id: str, day: date) -> Optional[BusinessDay]:
        ...

    @abstractmethod
    def find_in_range(
        self, ctx: Context, tenant_id: str, start: date, end: date, *, template_id: Optional[str] = None,
        locked_only: bool = False,
    ) -> List[BusinessDay]:
        ...

    @abstractmethod
    def existing_dates(self, ctx: Context, tenant_id: str, template_id: str, start: date, end: date) -> Set[date]:
        ...

    @abstractmethod
    def delete(self, ctx: Context, tenant_id: str, business_day_id: str) -> None:
        """Hard delete; slots, attendance and the adjustment go with it."""
