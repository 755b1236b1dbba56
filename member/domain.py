from __future__ import annotations
from datetime import datetime
from typing import FrozenSet, Iterable, Optional

from core.errors import ValidationError
from core.ids import new_id

DISPLAY_NAME_MAX_LENGTH = 255


def _validate(display_name: str, email: Optional[str]) -> None:
    if not display_name or not display_name.strip():
        raise ValidationError("display name is required", code="MEMBER_NAME_REQUIRED")
    if len(display_name) > DISPLAY_NAME_MAX_LENGTH:
        raise ValidationError(
            f"display name must be at most {DISPLAY_NAME_MAX_LENGTH} characters", code="MEMBER_NAME_TOO_LONG"
        )
    if email is not None and email != "" and "@" not in email:
        raise ValidationError("email address is malformed", code="INVALID_EMAIL")


class Member:
    """A person in exactly one tenant who can respond to business days and be assigned to slots."""

    __slots__ = (
        "_id", "_tenant_id", "_display_name", "_email", "_role_ids", "_is_active",
        "_created_at", "_updated_at", "_deleted_at",
    )

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        display_name: str,
        email: Optional[str],
        role_ids: Iterable[str],
        is_active: bool,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime],
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._display_name = display_name
        self._email = email
        self._role_ids = frozenset(role_ids)
        self._is_active = is_active
        self._created_at = created_at
        self._updated_at = updated_at
        self._deleted_at = deleted_at

    @classmethod
    def create(
        cls,
        now: datetime,
        tenant_id: str,
        display_name: str,
        *,
        email: Optional[str] = None,
        role_ids: Iterable[str] = (),
    ) -> "Member":
        _validate(display_name, email)
        return cls(
            id=new_id(),
            tenant_id=tenant_id,
            display_name=display_name.strip(),
            email=email or None,
            role_ids=role_ids,
            is_active=True,
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Member":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def email(self) -> Optional[str]:
        return self._email

    @property
    def role_ids(self) -> FrozenSet[str]:
        return self._role_ids

    @property
    def is_active(self) -> bool:
        return self._is_active

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

    def has_role(self, role_id: str) -> bool:
        return role_id in self._role_ids

    def update(self, now: datetime, *, display_name: str, email: Optional[str], is_active: bool) -> None:
        _validate(display_name, email)
        self._display_name = display_name.strip()
        self._email = email or None
        self._is_active = is_active
        self._updated_at = now

    def assign_roles(self, now: datetime, role_ids: Iterable[str]) -> None:
        self._role_ids = frozenset(role_ids)
        self._updated_at = now

    def delete(self, now: datetime) -> None:
        if self._deleted_at is None:
            self._deleted_at = now
            self._is_active = False
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<Member(id={self._id}, tenant_id={self._tenant_id}, display_name={self._display_name})>"
