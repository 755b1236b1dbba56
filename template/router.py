from fastapi import APIRouter, Depends, status

from core.unit_of_work import UnitOfWork, get_uow
from authz.deps import Principal, get_current_admin
from .schema import TemplateSchema, TemplateCreatePayload, TemplateUpdate
from . import service

template_router = APIRouter(prefix="/templates", tags=["templates"])

# List templates
@template_router.get("", response_model=list[TemplateSchema])
def list_templates(uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.list_templates(uow, admin.tenant_id)

# Get template by id
@template_router.get("/{template_id}", response_model=TemplateSchema)
def template_detail(template_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    return service.get_template(uow, admin.tenant_id, template_id)

# Create template
@template_router.post("", response_model=TemplateSchema, status_code=status.HTTP_201_CREATED)
def template_post(
    payload: TemplateCreatePayload,
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.create_template(
        uow,
        admin.tenant_id,
        payload.name,
        payload.recurrence.to_domain(),
        [s.to_domain() for s in payload.slots],
        description=payload.description,
        response_deadline_hours=payload.response_deadline_hours,
    )

# Update template (applies to business days created afterwards)
@template_router.patch("/{template_id}", response_model=TemplateSchema)
def template_patch(
    template_id: str,
    payload: TemplateUpdate,
    uow: UnitOfWork = Depends(get_uow),
    admin: Principal = Depends(get_current_admin),
    ):
    return service.update_template(
        uow,
        admin.tenant_id,
        template_id,
        name=payload.name,
        description=payload.description,
        recurrence=payload.recurrence.to_domain() if payload.recurrence else None,
        response_deadline_hours=payload.response_deadline_hours,
        slots=[s.to_domain() for s in payload.slots] if payload.slots is not None else None,
    )

# Delete template
@template_router.delete("/{template_id}")
def template_delete(template_id: str, uow: UnitOfWork = Depends(get_uow), admin: Principal = Depends(get_current_admin)):
    service.delete_template(uow, admin.tenant_id, template_id)
    return {"message": "template deleted"}
