from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_serializer

class MemberSchema(BaseModel):
    id: str
    tenant_id: str
    display_name: str
    email: Optional[str] = None
    role_ids: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

    @field_serializer("role_ids")
    def _sorted_roles(self, value: List[str]) -> List[str]:
        return sorted(value)

# what clients send
class MemberCreatePayload(BaseModel):
    display_name: str
    email: Optional[str] = None
    role_ids: List[str] = []
    model_config = ConfigDict(extra="forbid")

class MemberUpdate(BaseModel):
    display_name: Optional[str] = None
    email: Optional[str] = None
    is_active: Optional[bool] = None
    model_config = ConfigDict(extra="forbid")

class MemberRolesPayload(BaseModel):
    role_ids: List[str]
    model_config = ConfigDict(extra="forbid")
