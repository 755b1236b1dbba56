from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List

from core.context import Context
from .domain import Template


class TemplateRepository(ABC):

    @abstractmethod
    def save(self, ctx: Context, template: Template) -> None:
        """Upsert by id; the slot blueprint is replaced as a whole."""

    @abstractmethod
    def find_by_id(self, ctx: Context, tenant_id: str, template_id: str) -> Template:
        """Raises NotFoundError for missing, deleted or foreign templates."""

    @abstractmethod
    def find_all(self, ctx: Context, tenant_id: str) -> List[Template]:
        ...
