from fastapi import APIRouter, Depends, Query, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import MemberSchema, MemberCreatePayload, MemberUpdate, MemberRolesPayload
from . import service

member_router = APIRouter(prefix="/members", tags=["members"])

# List members
@member_router.get("", response_model=list[MemberSchema])
def list_members(
    include_inactive: bool = Query(False),
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.list_members(uow, admin.tenant_id, include_inactive=include_inactive)

# Get member by id
@member_router.get("/{member_id}", response_model=MemberSchema)
def member_detail(member_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_member(uow, admin.tenant_id, member_id)

# Create member
@member_router.post("", response_model=MemberSchema, status_code=status.HTTP_201_CREATED)
def member_post(payload: MemberCreatePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.create_member(
        uow, admin.tenant_id, payload.display_name, email=payload.email, role_ids=payload.role_ids
    )

# Update member
@member_router.patch("/{member_id}", response_model=MemberSchema)
def member_patch(member_id: str, payload: MemberUpdate, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.update_member(uow, admin.tenant_id, member_id, **payload.model_dump(exclude_unset=True))

# Replace member roles
@member_router.put("/{member_id}/roles", response_model=MemberSchema)
def member_roles_put(member_id: str, payload: MemberRolesPayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.assign_roles(uow, admin.tenant_id, member_id, payload.role_ids)

# Delete member
@member_router.delete("/{member_id}")
def member_delete(member_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.delete_member(uow, admin.tenant_id, member_id)
    return {"message": "member deleted"}
