from fastapi import APIRouter, Depends, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import RoleSchema, RoleCreatePayload, RoleUpdate
from . import service

role_router = APIRouter(prefix="/roles", tags=["roles"])

# List all roles
@role_router.get("", response_model=list[RoleSchema])
def list_roles(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.list_roles(uow, admin.tenant_id)

# Get role by id
@role_router.get("/{role_id}", response_model=RoleSchema)
def role_detail(role_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_role(uow, admin.tenant_id, role_id)

# Create role
@role_router.post("", response_model=RoleSchema, status_code=status.HTTP_201_CREATED)
def role_post(payload: RoleCreatePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.create_role(uow, admin.tenant_id, **payload.model_dump())

# Update role
@role_router.patch("/{role_id}", response_model=RoleSchema)
def role_patch(role_id: str, payload: RoleUpdate, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.update_role(uow, admin.tenant_id, role_id, **payload.model_dump(exclude_unset=True))

# Delete role
@role_router.delete("/{role_id}")
def role_delete(role_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.delete_role(uow, admin.tenant_id, role_id)
    return {"message": "role deleted"}
