from dataclasses import dataclass
from typing import Optional

from fastapi import Header, HTTPException

# Authentication happens upstream; these headers are set by the gateway and trusted here.


@dataclass(frozen=True)
class Principal:
    tenant_id: str
    admin_id: str


def get_current_admin(
    x_tenant_id: Optional[str] = Header(default=None),
    x_admin_id: Optional[str] = Header(default=None),
) -> Principal:
    if not x_tenant_id or not x_admin_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return Principal(tenant_id=x_tenant_id, admin_id=x_admin_id)


def require_system_admin(x_system_admin: Optional[str] = Header(default=None)) -> None:
    if (x_system_admin or "").lower() not in ("1", "true", "yes"):
        raise HTTPException(status_code=403, detail="System administrator required")

