"""
Shift adjustment: the administrator's explicit slot-to-member mapping for a
business day, and the rules it must satisfy before the day can be locked.

Checks run in a fixed order and stop at the first failure:

1. structure: non-empty, no repeated pair, slots of this day, known members
2. capacity per slot
3. overlapping windows for the same member
4. eligibility: active member, holds the slot's role, responded `available`
"""
from __future__ import annotations
from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Tuple

from attendance.domain import Attendance
from businessday.domain import BusinessDay, ShiftSlot
from core.errors import (
    CapacityExceededError,
    IneligibleAssignmentError,
    NotFoundError,
    OverlapError,
    ValidationError,
)
from core.ids import new_id
from member.domain import Member


@dataclass(frozen=True)
class Assignment:
    shift_slot_id: str
    member_id: str


def _check_structure(day: BusinessDay, assignments: List[Assignment], members: Mapping[str, Member]) -> None:
    if not assignments:
        raise ValidationError("at least one assignment is required", code="EMPTY_ADJUSTMENT")

    seen = set()
    for a in assignments:
        if a in seen:
            raise ValidationError(
                "the same member is assigned to a slot twice",
                code="DUPLICATE_ASSIGNMENT",
                details={"shift_slot_id": a.shift_slot_id, "member_id": a.member_id},
            )
        seen.add(a)
        if not day.has_slot(a.shift_slot_id):
            raise ValidationError(
                "shift slot does not belong to this business day",
                code="UNKNOWN_SHIFT_SLOT",
                details={"shift_slot_id": a.shift_slot_id, "business_day_id": day.id},
            )
        if a.member_id not in members:
            raise NotFoundError("member", a.member_id)


def _check_capacity(day: BusinessDay, assignments: List[Assignment]) -> None:
    counts = Counter(a.shift_slot_id for a in assignments)
    for slot in day.slots:
        if counts[slot.id] > slot.capacity:
            raise CapacityExceededError(slot.id, slot.capacity, counts[slot.id])


def _check_overlap(day: BusinessDay, assignments: List[Assignment]) -> None:
    by_member: Dict[str, List[ShiftSlot]] = defaultdict(list)
    for a in assignments:
        by_member[a.member_id].append(day.slot(a.shift_slot_id))
    for member_id, slots in by_member.items():
        for i, first in enumerate(slots):
            for second in slots[i + 1:]:
                if first.overlaps(second):
                    raise OverlapError(member_id, first.id, second.id)


def _check_eligibility(
    day: BusinessDay,
    assignments: List[Assignment],
    members: Mapping[str, Member],
    attendance: Mapping[str, Attendance],
) -> None:
    for a in assignments:
        member = members[a.member_id]
        slot = day.slot(a.shift_slot_id)
        if not member.is_active:
            raise IneligibleAssignmentError(member.id, slot.id, "member is inactive")
        if not member.has_role(slot.role_id):
            raise IneligibleAssignmentError(member.id, slot.id, "member does not hold the required role")
        response = attendance.get(member.id)
        if response is None or not response.is_available:
            raise IneligibleAssignmentError(member.id, slot.id, "member is not available on this day")


def check_assignments(
    day: BusinessDay,
    assignments: List[Assignment],
    members: Mapping[str, Member],
    attendance: Mapping[str, Attendance],
) -> None:
    """Raise the first rule violation, or return if the mapping can be finalized."""
    _check_structure(day, assignments, members)
    _check_capacity(day, assignments)
    _check_overlap(day, assignments)
    _check_eligibility(day, assignments, members, attendance)


class ShiftAdjustment:
    __slots__ = ("_id", "_tenant_id", "_business_day_id", "_assignments", "_created_by", "_created_at")

    def __init__(
        self,
        *,
        id: str,
        tenant_id: str,
        business_day_id: str,
        assignments: Iterable[Assignment],
        created_by: str,
        created_at: datetime,
    ):
        self._id = id
        self._tenant_id = tenant_id
        self._business_day_id = business_day_id
        self._assignments = tuple(assignments)
        self._created_by = created_by
        self._created_at = created_at

    @classmethod
    def create(
        cls,
        now: datetime,
        day: BusinessDay,
        assignments: Iterable[Assignment],
        created_by: str,
        *,
        members: Mapping[str, Member],
        attendance: Mapping[str, Attendance],
    ) -> "ShiftAdjustment":
        items = list(assignments)
        if not created_by:
            raise ValidationError("adjustment author is required", code="ADMIN_REQUIRED")
        check_assignments(day, items, members, attendance)
        return cls(
            id=new_id(),
            tenant_id=day.tenant_id,
            business_day_id=day.id,
            assignments=items,
            created_by=created_by,
            created_at=now,
        )

    @classmethod
    def reconstruct(cls, **fields) -> "ShiftAdjustment":
        return cls(**fields)

    @property
    def id(self) -> str:
        return self._id

    @property
    def tenant_id(self) -> str:
        return self._tenant_id

    @property
    def business_day_id(self) -> str:
        return self._business_day_id

    @property
    def assignments(self) -> Tuple[Assignment, ...]:
        return self._assignments

    @property
    def created_by(self) -> str:
        return self._created_by

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def members_for(self, shift_slot_id: str) -> List[str]:
        return [a.member_id for a in self._assignments if a.shift_slot_id == shift_slot_id]

    def __repr__(self) -> str:
        return f"<ShiftAdjustment(business_day_id={self._business_day_id}, assignments={len(self._assignments)})>"
