from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class RoleSchema(BaseModel):
    id: str
    tenant_id: str
    name: str
    description: str
    default_capacity: int
    display_order: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

# what clients send
class RoleCreatePayload(BaseModel):
    name: str
    description: str = ""
    default_capacity: int = Field(default=1, ge=1)
    display_order: int = Field(default=0, ge=0)
    model_config = ConfigDict(extra="forbid")

class RoleUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    default_capacity: Optional[int] = Field(default=None, ge=1)
    display_order: Optional[int] = Field(default=None, ge=0)
    model_config = ConfigDict(extra="forbid")
