import logging
from typing import List, Optional

from core.errors import ValidationError
from core.unit_of_work import UnitOfWork
from .domain import Role

logger = logging.getLogger(__name__)


def _ensure_unique_name(uow: UnitOfWork, tenant_id: str, name: str, role_id: Optional[str] = None) -> None:
    existing = uow.roles.find_by_name(uow.ctx, tenant_id, name.strip())
    if existing is not None and existing.id != role_id:
        raise ValidationError(
            "a role with this name already exists", code="DUPLICATE_ROLE_NAME", details={"name": name}
        )


def list_roles(uow: UnitOfWork, tenant_id: str) -> List[Role]:
    return uow.roles.find_all(uow.ctx, tenant_id)


def get_role(uow: UnitOfWork, tenant_id: str, role_id: str) -> Role:
    return uow.roles.find_by_id(uow.ctx, tenant_id, role_id)


def create_role(
    uow: UnitOfWork,
    tenant_id: str,
    name: str,
    *,
    description: str = "",
    default_capacity: int = 1,
    display_order: int = 0,
) -> Role:
    uow.tenants.find_by_id(uow.ctx, tenant_id)
    role = Role.create(
        uow.clock.now(),
        tenant_id,
        name,
        description=description,
        default_capacity=default_capacity,
        display_order=display_order,
    )
    _ensure_unique_name(uow, tenant_id, role.name)
    uow.roles.save(uow.ctx, role)
    uow.commit()
    logger.info("role created", extra={"tenant_id": tenant_id, "role_id": role.id})
    return role


def update_role(
    uow: UnitOfWork,
    tenant_id: str,
    role_id: str,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    default_capacity: Optional[int] = None,
    display_order: Optional[int] = None,
) -> Role:
    role = uow.roles.find_by_id(uow.ctx, tenant_id, role_id)
    if name is not None:
        _ensure_unique_name(uow, tenant_id, name, role.id)
    role.update(
        uow.clock.now(),
        name=role.name if name is None else name,
        description=role.description if description is None else description,
        default_capacity=role.default_capacity if default_capacity is None else default_capacity,
        display_order=role.display_order if display_order is None else display_order,
    )
    uow.roles.save(uow.ctx, role)
    uow.commit()
    logger.info("role updated", extra={"tenant_id": tenant_id, "role_id": role.id})
    return role


def delete_role(uow: UnitOfWork, tenant_id: str, role_id: str) -> None:
    role = uow.roles.find_by_id(uow.ctx, tenant_id, role_id)
    role.delete(uow.clock.now())
    uow.roles.save(uow.ctx, role)
    uow.commit()
    logger.info("role deleted", extra={"tenant_id": tenant_id, "role_id": role.id})
