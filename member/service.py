import logging
from typing import Iterable, List, Optional

from core.unit_of_work import UnitOfWork
from .domain import Member

logger = logging.getLogger(__name__)


def _check_roles(uow: UnitOfWork, tenant_id: str, role_ids: Iterable[str]) -> List[str]:
    ids = list(dict.fromkeys(role_ids))
    for role_id in ids:
        uow.roles.find_by_id(uow.ctx, tenant_id, role_id)
    return ids


def list_members(uow: UnitOfWork, tenant_id: str, *, include_inactive: bool = False) -> List[Member]:
    return uow.members.find_all(uow.ctx, tenant_id, include_inactive=include_inactive)


def get_member(uow: UnitOfWork, tenant_id: str, member_id: str) -> Member:
    return uow.members.find_by_id(uow.ctx, tenant_id, member_id)


def create_member(
    uow: UnitOfWork,
    tenant_id: str,
    display_name: str,
    *,
    email: Optional[str] = None,
    role_ids: Iterable[str] = (),
) -> Member:
    uow.tenants.find_by_id(uow.ctx, tenant_id)
    roles = _check_roles(uow, tenant_id, role_ids)
    member = Member.create(uow.clock.now(), tenant_id, display_name, email=email, role_ids=roles)
    uow.members.save(uow.ctx, member)
    uow.commit()
    logger.info("member created", extra={"tenant_id": tenant_id, "member_id": member.id})
    return member


def update_member(
    uow: UnitOfWork,
    tenant_id: str,
    member_id: str,
    *,
    display_name: Optional[str] = None,
    email: Optional[str] = None,
    is_active: Optional[bool] = None,
) -> Member:
    member = uow.members.find_by_id(uow.ctx, tenant_id, member_id)
    member.update(
        uow.clock.now(),
        display_name=member.display_name if display_name is None else display_name,
        email=member.email if email is None else email,
        is_active=member.is_active if is_active is None else is_active,
    )
    uow.members.save(uow.ctx, member)
    uow.commit()
    logger.info("member updated", extra={"tenant_id": tenant_id, "member_id": member.id})
    return member


def assign_roles(uow: UnitOfWork, tenant_id: str, member_id: str, role_ids: Iterable[str]) -> Member:
    member = uow.members.find_by_id(uow.ctx, tenant_id, member_id)
    member.assign_roles(uow.clock.now(), _check_roles(uow, tenant_id, role_ids))
    uow.members.save(uow.ctx, member)
    uow.commit()
    logger.info(
        "member roles assigned",
        extra={"tenant_id": tenant_id, "member_id": member.id, "role_ids": sorted(member.role_ids)},
    )
    return member


def delete_member(uow: UnitOfWork, tenant_id: str, member_id: str) -> None:
    member = uow.members.find_by_id(uow.ctx, tenant_id, member_id)
    member.delete(uow.clock.now())
    uow.members.save(uow.ctx, member)
    uow.commit()
    logger.info("member deleted", extra={"tenant_id": tenant_id, "member_id": member.id})
