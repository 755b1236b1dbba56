from fastapi import APIRouter, Depends, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin, require_system_admin

from .schema import TenantSchema, TenantCreatePayload, TenantUpdate
from . import service

tenant_router = APIRouter(prefix="/tenants", tags=["tenants"])

@tenant_router.get("/me", response_model=TenantSchema)
def my_tenant(
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.get_tenant(uow, admin.tenant_id)

# Provision a tenant
@tenant_router.post("", response_model=TenantSchema, status_code=status.HTTP_201_CREATED)
def tenant_post(
    payload: TenantCreatePayload,
    uow: UnitOfWork = Depends(get_uow),
    _sys = Depends(require_system_admin),
    ):
    return service.create_tenant(uow, payload.name, payload.timezone)

# Update own tenant
@tenant_router.patch("/me", response_model=TenantSchema)
def tenant_patch(
    payload: TenantUpdate,
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.update_tenant(uow, admin.tenant_id, name=payload.name, timezone=payload.timezone)

# Delete own tenant (soft)
@tenant_router.delete("/me")
def tenant_delete(
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    service.delete_tenant(uow, admin.tenant_id)
    return {"message": "tenant deleted"}
