import logging
from typing import Optional

from core.config_loader import settings
from core.unit_of_work import UnitOfWork
from .domain import Tenant

logger = logging.getLogger(__name__)


def get_tenant(uow: UnitOfWork, tenant_id: str) -> Tenant:
    return uow.tenants.find_by_id(uow.ctx, tenant_id)


def create_tenant(uow: UnitOfWork, name: str, timezone: Optional[str] = None) -> Tenant:
    tenant = Tenant.create(uow.clock.now(), name, timezone or settings.DEFAULT_TIMEZONE)
    uow.tenants.save(uow.ctx, tenant)
    uow.commit()
    logger.info("tenant created", extra={"tenant_id": tenant.id})
    return tenant


def update_tenant(
    uow: UnitOfWork, tenant_id: str, *, name: Optional[str] = None, timezone: Optional[str] = None
) -> Tenant:
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    tenant.update(
        uow.clock.now(),
        name=tenant.name if name is None else name,
        timezone=tenant.timezone if timezone is None else timezone,
    )
    uow.tenants.save(uow.ctx, tenant)
    uow.commit()
    logger.info("tenant updated", extra={"tenant_id": tenant.id})
    return tenant


def delete_tenant(uow: UnitOfWork, tenant_id: str) -> None:
    tenant = uow.tenants.find_by_id(uow.ctx, tenant_id)
    tenant.delete(uow.clock.now())
    uow.tenants.save(uow.ctx, tenant)
    uow.commit()
    logger.info("tenant deleted", extra={"tenant_id": tenant.id})
