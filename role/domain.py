from __future__ import annotations
from datetime import datetime
from typing import Optional

from core.errors import ValidationError
from core.ids import new_id

NAME_MAX_LENGTH = 100


def _validate(name: str, default_capacity: int, display_order: int) -> None:
    if not name or not name.strip():
        raise ValidationError("role name is required", code="ROLE_NAME_REQUIRED")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"role name must be at most {NAME_MAX_LENGTH} characters", code="ROLE_NAME_TOO_LONG"
        )
    if default_capacity < 1:
        raise ValidationError("default capacity must be at least 1", code="INVALID_CAPACITY")
    if display_order < 0:
        raise ValidationError("display order must not be negative", code="INVALID_DISPLAY_ORDER")


class Role:
    """A tenant-defined job role; shift slots require one and members hold several."""

    __slots__ = (
        "_id", "_tenant_id", "_name", "_description", "_default_capacity", "_display_order",
        "_created_at", "_updated_at", "_deleted_at",
    )

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        name: str,
        description: str,
        default_capacity: int,
        display_order: int,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime],
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._name = name
        self._description = description
        self._default_capacity = default_capacity
        self._display_order = display_order
        self._created_at = created_at
        self._updated_at = updated_at
        self._deleted_at = deleted_at

    @classmethod
    def create(
        cls,
        now: datetime,
        tenant_id: str,
        name: str,
        *,
        description: str = "",
        default_capacity: int = 1,
        display_order: int = 0,
    ) -> "Role":
        _validate(name, default_capacity, display_order)
        return cls(
            id=new_id(),
            tenant_id=tenant_id,
            name=name.strip(),
            description=description or "",
            default_capacity=default_capacity,
            display_order=display_order,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Role":
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
    def default_capacity(self) -> int:
        return self._default_capacity

    @property
    def display_order(self) -> int:
        return self._display_order

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

    def update(
        self,
        now: datetime,
        *,
        name: str,
        description: str,
        default_capacity: int,
        display_order: int,
    ) -> None:
        _validate(name, default_capacity, display_order)
        self._name = name.strip()
        self._description = description or ""
        self._default_capacity = default_capacity
        self._display_order = display_order
        self._updated_at = now

    def delete(self, now: datetime) -> None:
        if self._deleted_at is None:
            self._deleted_at = now
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<Role(id={self._id}, tenant_id={self._tenant_id}, name={self._name})>"
