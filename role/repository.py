from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional

from core.context import Context
from .domain import Role


class RoleRepository(ABC):
    """Storage contract for roles. Every finder is scoped to one tenant."""

    @abstractmethod
    def save(self, ctx: Context, role: Role) -> None:
        """
        Insert or update a role by id.

        Raises:
            NotFoundError: if the id exists under another tenant
            ValidationError: if another live role of the tenant has the same name
        """

    @abstractmethod
    def find_by_id(self, ctx: Context, tenant_id: str, role_id: str) -> Role:
        """Raises NotFoundError for missing, deleted or foreign roles."""

    @abstractmethod
    def find_by_name(self, ctx: Context, tenant_id: str, name: str) -> Optional[Role]:
        ...

    @abstractmethod
    def find_all(self, ctx: Context, tenant_id: str) -> List[Role]:
        """Live roles ordered by display order, then name."""
