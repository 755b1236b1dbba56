"""
Announcements and their audience.

An announcement is either global (every tenant's admins see it) or addressed
to one tenant. The audience is an explicit scope value rather than a nullable
tenant id, and `scope_tenant_id` is the one place that tells them apart.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from core.clock import as_utc
from core.errors import ValidationError
from core.ids import new_id

TITLE_MAX_LENGTH = 200


@dataclass(frozen=True)
class GlobalScope:
    pass


@dataclass(frozen=True)
class TenantScope:
    tenant_id: str

    def __post_init__(self):
        if not self.tenant_id:
            raise ValidationError("tenant scope needs a tenant id", code="TENANT_REQUIRED")


AnnouncementScope = Union[GlobalScope, TenantScope]


def scope_tenant_id(scope: AnnouncementScope) -> Optional[str]:
    if isinstance(scope, GlobalScope):
        return None
    if isinstance(scope, TenantScope):
        return scope.tenant_id
    raise TypeError(f"unsupported announcement scope: {scope!r}")


def scope_of(tenant_id: Optional[str]) -> AnnouncementScope:
    return GlobalScope() if tenant_id is None else TenantScope(tenant_id)


def _validate(title: str, body: str) -> None:
    if not title:
        raise ValidationError("title is required", code="TITLE_REQUIRED")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(
            f"title must be at most {TITLE_MAX_LENGTH} characters",
            code="TITLE_TOO_LONG",
            details={"length": len(title), "max": TITLE_MAX_LENGTH},
        )
    if not body:
        raise ValidationError("body is required", code="BODY_REQUIRED")


class Announcement:
    __slots__ = ("_id", "_scope", "_title", "_body", "_published_at", "_created_at", "_updated_at", "_deleted_at")

    def __init__(
        self,
        *,
        id: str,
        scope: AnnouncementScope,
        title: str,
        body: str,
        published_at: datetime,
        created_at: datetime,
        updated_at: datetime,
        deleted_at: Optional[datetime],
    ):
        self._id = id
        self._scope = scope
        self._title = title
        self._body = body
        self._published_at = published_at
        self._created_at = created_at
        self._updated_at = updated_at
        self._deleted_at = deleted_at

    @classmethod
    def create(
        cls,
        now: datetime,
        scope: AnnouncementScope,
        title: str,
        body: str,
        published_at: Optional[datetime] = None,
    ) -> "Announcement":
        scope_tenant_id(scope)
        _validate(title, body)
        return cls(
            id=new_id(),
            scope=scope,
            title=title,
            body=body,
            published_at=as_utc(published_at or now),
            created_at=now,
            updated_at=now,
            deleted_at=None,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "Announcement":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def scope(self) -> AnnouncementScope:
        return self._scope

    @property
    def tenant_id(self) -> Optional[str]:
        return scope_tenant_id(self._scope)

    @property
    def title(self) -> str:
        return self._title

    @property
    def body(self) -> str:
        return self._body

    @property
    def published_at(self) -> datetime:
        return self._published_at

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

    def is_published(self, now: datetime) -> bool:
        return self._deleted_at is None and self._published_at <= now

    def is_for_all_tenants(self) -> bool:
        return isinstance(self._scope, GlobalScope)

    def is_visible_to(self, tenant_id: str) -> bool:
        return self.is_for_all_tenants() or self.tenant_id == tenant_id

    def update(self, now: datetime, *, title: str, body: str, published_at: datetime) -> None:
        _validate(title, body)
        self._title = title
        self._body = body
        self._published_at = as_utc(published_at)
        self._updated_at = now

    def delete(self, now: datetime) -> None:
        if self._deleted_at is None:
            self._deleted_at = now
            self._updated_at = now

    def __repr__(self) -> str:
        return f"<Announcement(id={self._id}, scope={self._scope}, title={self._title!r})>"
