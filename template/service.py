import logging
from typing import Iterable, List, Optional

from core.config_loader import settings
from core.unit_of_work import UnitOfWork
from .domain import Recurrence, SlotBlueprint, Template

logger = logging.getLogger(__name__)


def _check_roles(uow: UnitOfWork, tenant_id: str, slots: Iterable[SlotBlueprint]) -> None:
    for role_id in dict.fromkeys(s.role_id for s in slots):
        uow.roles.find_by_id(uow.ctx, tenant_id, role_id)


def list_templates(uow: UnitOfWork, tenant_id: str) -> List[Template]:
    return uow.templates.find_all(uow.ctx, tenant_id)


def get_template(uow: UnitOfWork, tenant_id: str, template_id: str) -> Template:
    return uow.templates.find_by_id(uow.ctx, tenant_id, template_id)


def create_template(
    uow: UnitOfWork,
    tenant_id: str,
    name: str,
    recurrence: Recurrence,
    slots: List[SlotBlueprint],
    *,
    description: str = "",
    response_deadline_hours: Optional[int] = None,
) -> Template:
    uow.tenants.find_by_id(uow.ctx, tenant_id)
    _check_roles(uow, tenant_id, slots)
    if response_deadline_hours is None:
        response_deadline_hours = settings.DEFAULT_RESPONSE_DEADLINE_HOURS
    template = Template.create(
        uow.clock.now(),
        tenant_id,
        name,
        recurrence,
        slots,
        description=description,
        response_deadline_hours=response_deadline_hours,
    )
    uow.templates.save(uow.ctx, template)
    uow.commit()
    logger.info("template created", extra={"tenant_id": tenant_id, "template_id": template.id})
    return template


def update_template(
    uow: UnitOfWork,
    tenant_id: str,
    template_id: str,
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
    recurrence: Optional[Recurrence] = None,
    response_deadline_hours: Optional[int] = None,
    slots: Optional[List[SlotBlueprint]] = None,
) -> Template:
    template = uow.templates.find_by_id(uow.ctx, tenant_id, template_id)
    if slots is not None:
        _check_roles(uow, tenant_id, slots)
    template.update(
        uow.clock.now(),
        name=template.name if name is None else name,
        description=template.description if description is None else description,
        recurrence=template.recurrence if recurrence is None else recurrence,
        response_deadline_hours=(
            template.response_deadline_hours if response_deadline_hours is None else response_deadline_hours
        ),
        slots=template.slots if slots is None else slots,
    )
    uow.templates.save(uow.ctx, template)
    uow.commit()
    logger.info("template updated", extra={"tenant_id": tenant_id, "template_id": template.id})
    return template


def delete_template(uow: UnitOfWork, tenant_id: str, template_id: str) -> None:
    template = uow.templates.find_by_id(uow.ctx, tenant_id, template_id)
    template.delete(uow.clock.now())
    uow.templates.save(uow.ctx, template)
    uow.commit()
    logger.info("template deleted", extra={"tenant_id": tenant_id, "template_id": template.id})
