from datetime import date, datetime
from typing import List
from pydantic import BaseModel, ConfigDict

class CalendarMemberSchema(BaseModel):
    member_id: str
    display_name: str
    model_config = ConfigDict(from_attributes=True)

class CalendarSlotSchema(BaseModel):
    shift_slot_id: str
    name: str
    role_id: str
    start_at: datetime
    end_at: datetime
    capacity: int
    members: List[CalendarMemberSchema]
    model_config = ConfigDict(from_attributes=True)

class CalendarSchema(BaseModel):
    business_day_id: str
    template_id: str
    date: date
    finalized_at: datetime
    finalized_by: str
    slots: List[CalendarSlotSchema]
    model_config = ConfigDict(from_attributes=True)
