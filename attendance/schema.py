from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from .domain import AttendanceStatus

class AttendanceSchema(BaseModel):
    id: str
    business_day_id: str
    member_id: str
    status: AttendanceStatus
    note: Optional[str] = None
    submitted_at: datetime
    model_config = ConfigDict(from_attributes=True)

# what clients send
class AttendanceSubmitPayload(BaseModel):
    status: str
    note: Optional[str] = Field(default=None, max_length=500)
    model_config = ConfigDict(extra="forbid")
