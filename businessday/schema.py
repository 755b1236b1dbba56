from datetime import date, datetime, time
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# ---------- DB → API (read) ----------
class ShiftSlotSchema(BaseModel):
    id: str
    role_id: str
    name: str
    capacity: int
    start_at: datetime
    end_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BusinessDaySchema(BaseModel):
    id: str
    tenant_id: str
    template_id: str
    date: date
    response_deadline: datetime
    locked_at: Optional[datetime] = None
    is_locked: bool
    version: int
    slots: List[ShiftSlotSchema]
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class GenerateResult(BaseModel):
    created: int
    skipped: int


# ---------- Client → API ----------
class BusinessDayCreatePayload(BaseModel):
    template_id: str
    date: date
    response_deadline: Optional[datetime] = None
    model_config = ConfigDict(extra="forbid")


class BusinessDayGeneratePayload(BaseModel):
    template_id: str
    start: date
    end: date
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _ordered(self):
        if self.end < self.start:
            raise ValueError("end must be on or after start")
        return self


class BusinessDayUpdate(BaseModel):
    response_deadline: datetime
    model_config = ConfigDict(extra="forbid")


class ShiftSlotCreatePayload(BaseModel):
    name: str
    role_id: str
    start_time: time
    end_time: time
    capacity: Optional[int] = Field(default=None, ge=1)
    model_config = ConfigDict(extra="forbid")


class ShiftSlotUpdate(BaseModel):
    name: Optional[str] = None
    role_id: Optional[str] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    model_config = ConfigDict(extra="forbid")
