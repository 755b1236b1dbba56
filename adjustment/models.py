from __future__ import annotations
from datetime import datetime
from typing import List
from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class ShiftAdjustmentRecord(Base):
    __tablename__ = "shift_adjustments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True, nullable=False)
    business_day_id: Mapped[str] = mapped_column(
        ForeignKey("business_days.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    created_by: Mapped[str] = mapped_column(String(64), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # relationships
    assignments: Mapped[List["ShiftAssignmentRecord"]] = relationship(
        back_populates="adjustment",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ShiftAssignmentRecord.position",
        lazy="selectin",
    )


class ShiftAssignmentRecord(Base):
    __tablename__ = "shift_assignments"

    id: Mapped[int] = mapped_column(primary_key=True)
    adjustment_id: Mapped[str] = mapped_column(
        ForeignKey("shift_adjustments.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    shift_slot_id: Mapped[str] = mapped_column(ForeignKey("shift_slots.id", ondelete="CASCADE"), index=True, nullable=False)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id", ondelete="CASCADE"), index=True, nullable=False)

    adjustment: Mapped["ShiftAdjustmentRecord"] = relationship(back_populates="assignments")

    __table_args__ = (
        UniqueConstraint("adjustment_id", "shift_slot_id", "member_id", name="uq_assignment_slot_member"),
    )
