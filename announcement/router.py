from fastapi import APIRouter, Depends, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin, require_system_admin
from .domain import GlobalScope, TenantScope
from .schema import (
    AnnouncementSchema,
    AnnouncementFeedItem,
    AnnouncementCreatePayload,
    AnnouncementUpdate,
    UnreadCount,
)
from . import service

announcement_router = APIRouter(prefix="/announcements", tags=["announcements"])
system_announcement_router = APIRouter(prefix="/system/announcements", tags=["announcements"])

# --- feed for the signed-in admin ---

@announcement_router.get("", response_model=list[AnnouncementFeedItem])
def list_announcements(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.list_announcements(uow, admin.tenant_id, admin.admin_id)

@announcement_router.get("/unread-count", response_model=UnreadCount)
def unread_count(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return {"count": service.get_unread_count(uow, admin.tenant_id, admin.admin_id)}

@announcement_router.post("/read-all")
def read_all(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return {"marked": service.mark_all_as_read(uow, admin.tenant_id, admin.admin_id)}

@announcement_router.post("/{announcement_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def read_one(announcement_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.mark_as_read(uow, admin.tenant_id, admin.admin_id, announcement_id)

# --- tenant-scoped authoring ---

@announcement_router.get("/manage", response_model=list[AnnouncementSchema])
def list_tenant_announcements(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.list_scope_announcements(uow, TenantScope(admin.tenant_id))

@announcement_router.post("", response_model=AnnouncementSchema, status_code=status.HTTP_201_CREATED)
def announcement_post(payload: AnnouncementCreatePayload, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.create_announcement(
        uow, TenantScope(admin.tenant_id), payload.title, payload.body, payload.published_at
    )

@announcement_router.patch("/{announcement_id}", response_model=AnnouncementSchema)
def announcement_patch(announcement_id: str, payload: AnnouncementUpdate, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.update_announcement(
        uow, TenantScope(admin.tenant_id), announcement_id, **payload.model_dump(exclude_unset=True)
    )

@announcement_router.delete("/{announcement_id}")
def announcement_delete(announcement_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.delete_announcement(uow, TenantScope(admin.tenant_id), announcement_id)
    return {"message": "announcement deleted"}

# --- global announcements (system administrators) ---

@system_announcement_router.get("", response_model=list[AnnouncementSchema])
def list_global_announcements(uow: UnitOfWork = Depends(get_uow), _sys = Depends(require_system_admin)):
    return service.list_scope_announcements(uow, GlobalScope())

@system_announcement_router.post("", response_model=AnnouncementSchema, status_code=status.HTTP_201_CREATED)
def global_announcement_post(payload: AnnouncementCreatePayload, uow: UnitOfWork = Depends(get_uow), _sys = Depends(require_system_admin)):
    return service.create_announcement(uow, GlobalScope(), payload.title, payload.body, payload.published_at)

@system_announcement_router.patch("/{announcement_id}", response_model=AnnouncementSchema)
def global_announcement_patch(announcement_id: str, payload: AnnouncementUpdate, uow: UnitOfWork = Depends(get_uow), _sys = Depends(require_system_admin)):
    return service.update_announcement(uow, GlobalScope(), announcement_id, **payload.model_dump(exclude_unset=True))

@system_announcement_router.delete("/{announcement_id}")
def global_announcement_delete(announcement_id: str, uow: UnitOfWork = Depends(get_uow), _sys = Depends(require_system_admin)):
    service.delete_announcement(uow, GlobalScope(), announcement_id)
    return {"message": "announcement deleted"}
