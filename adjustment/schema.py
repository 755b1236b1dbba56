from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field

class AssignmentSchema(BaseModel):
    shift_slot_id: str
    member_id: str
    model_config = ConfigDict(from_attributes=True)

class ShiftAdjustmentSchema(BaseModel):
    id: str
    business_day_id: str
    assignments: List[AssignmentSchema]
    created_by: str
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)

# what clients send
class AssignmentPayload(BaseModel):
    shift_slot_id: str
    member_id: str
    model_config = ConfigDict(extra="forbid")

class FinalizePayload(BaseModel):
    assignments: List[AssignmentPayload] = Field(min_length=1)
    model_config = ConfigDict(extra="forbid")
