from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from core.context import Context
from .domain import Member


class MemberRepository(ABC):

    @abstractmethod
    def save(self, ctx: Context, member: Member) -> None:
        """Upsert by id, role references included. NotFoundError if the id belongs to another tenant."""

    @abstractmethod
    def find_by_id(self, ctx: Context, tenant_id: str, member_id: str) -> Member:
        """Raises NotFoundError for missing, deleted or foreign members."""

    @abstractmethod
    def find_by_ids(self, ctx: Context, tenant_id: str, member_ids: Iterable[str]) -> Dict[str, Member]:
        """Live members of the tenant among `member_ids`; unknown ids are simply absent."""

    @abstractmethod
    def find_all(self, ctx: Context, tenant_id: str, *, include_inactive: bool = False) -> List[Member]:
        ...
