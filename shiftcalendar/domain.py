"""Calendar: read-only projection of a locked business day and its adjustment."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Tuple

from adjustment.domain import ShiftAdjustment
from businessday.domain import BusinessDay
from core.errors import NotFoundError
from member.domain import Member


@dataclass(frozen=True)
class CalendarMember:
    member_id: str
    display_name: str


@dataclass(frozen=True)
class CalendarSlot:
    shift_slot_id: str
    name: str
    role_id: str
    start_at: datetime
    end_at: datetime
    capacity: int
    members: Tuple[CalendarMember, ...]


@dataclass(frozen=True)
class Calendar:
    business_day_id: str
    template_id: str
    date: date
    finalized_at: datetime
    finalized_by: str
    slots: Tuple[CalendarSlot, ...]


def build_calendar(day: BusinessDay, adjustment: ShiftAdjustment, members: Mapping[str, Member]) -> Calendar:
    if not day.is_locked or adjustment.business_day_id != day.id:
        raise NotFoundError("calendar", day.id)

    slots = []
    for slot in day.slots:
        assigned = []
        for member_id in adjustment.members_for(slot.id):
            member = members.get(member_id)
            # soft-deleted members still appear, by id
            assigned.append(CalendarMember(member_id, member.display_name if member else ""))
        slots.append(
            CalendarSlot(
                shift_slot_id=slot.id,
                name=slot.name,
                role_id=slot.role_id,
                start_at=slot.start_at,
                end_at=slot.end_at,
                capacity=slot.capacity,
                members=tuple(assigned),
            )
        )
    return Calendar(
        business_day_id=day.id,
        template_id=day.template_id,
        date=day.date,
        finalized_at=day.locked_at,
        finalized_by=adjustment.created_by,
        slots=tuple(slots),
    )
