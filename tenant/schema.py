from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

class TenantSchema(BaseModel):
    id: str
    name: str
    timezone: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)

# what clients send
class TenantCreatePayload(BaseModel):
    name: str
    timezone: Optional[str] = None
    model_config = ConfigDict(extra="forbid")

class TenantUpdate(BaseModel):
    name: Optional[str] = None
    timezone: Optional[str] = None
    model_config = ConfigDict(extra="forbid")
