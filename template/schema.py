from __future__ import annotations
from datetime import date, datetime, time
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .domain import Recurrence, RecurrenceKind, SlotBlueprint


# ---------- DB → API (read) ----------
class SlotBlueprintSchema(BaseModel):
    name: str
    role_id: str
    start_time: time
    end_time: time
    capacity: Optional[int] = None
    model_config = ConfigDict(from_attributes=True)


class RecurrenceSchema(BaseModel):
    kind: RecurrenceKind
    start_date: date
    weekday: int
    model_config = ConfigDict(from_attributes=True)


class TemplateSchema(BaseModel):
    id: str
    tenant_id: str
    name: str
    description: str
    recurrence: RecurrenceSchema
    response_deadline_hours: int
    slots: List[SlotBlueprintSchema]
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ---------- Client → API ----------
class SlotBlueprintPayload(BaseModel):
    name: str
    role_id: str
    start_time: time
    end_time: time
    capacity: Optional[int] = Field(default=None, ge=1)
    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _window(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self

    def to_domain(self) -> SlotBlueprint:
        return SlotBlueprint(**self.model_dump())


class RecurrencePayload(BaseModel):
    kind: Literal["none", "weekly", "biweekly"] = "weekly"
    start_date: date
    weekday: Optional[int] = Field(default=None, ge=0, le=6, description="0=Mon .. 6=Sun")
    model_config = ConfigDict(extra="forbid")

    def to_domain(self) -> Recurrence:
        return Recurrence.of(self.kind, self.start_date, self.weekday)


class TemplateCreatePayload(BaseModel):
    name: str
    description: str = ""
    recurrence: RecurrencePayload
    response_deadline_hours: Optional[int] = Field(default=None, ge=0)
    slots: List[SlotBlueprintPayload] = []
    model_config = ConfigDict(extra="forbid")


class TemplateUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    recurrence: Optional[RecurrencePayload] = None
    response_deadline_hours: Optional[int] = Field(default=None, ge=0)
    slots: Optional[List[SlotBlueprintPayload]] = None
    model_config = ConfigDict(extra="forbid")
