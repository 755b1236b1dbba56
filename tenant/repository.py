"""Tenant repository contract."""
from __future__ import annotations
from abc import ABC, abstractmethod

from core.context import Context
from .domain import Tenant


class TenantRepository(ABC):

    @abstractmethod
    def save(self, ctx: Context, tenant: Tenant) -> None:
        """Insert or update by id."""

    @abstractmethod
    def find_by_id(self, ctx: Context, tenant_id: str) -> Tenant:
        """
        Load a tenant that is not soft-deleted.

        Raises:
            NotFoundError: if the tenant is missing or deleted
        """
