from __future__ import annotations
import datetime as dt
from datetime import datetime
from typing import List
from sqlalchemy import String, Integer, Date, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class BusinessDayRecord(Base):
    __tablename__ = "business_days"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True, nullable=False)
    template_id: Mapped[str] = mapped_column(ForeignKey("templates.id", ondelete="CASCADE"), index=True, nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    response_deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    locked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # relationships
    slots: Mapped[List["ShiftSlotRecord"]] = relationship(
        back_populates="business_day",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ShiftSlotRecord.start_at",
        lazy="selectin",
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "template_id", "date", name="uq_business_day_template_date"),
        Index("ix_business_days_tenant_date", "tenant_id", "date"),
    )


class ShiftSlotRecord(Base):
    __tablename__ = "shift_slots"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    business_day_id: Mapped[str] = mapped_column(
        ForeignKey("business_days.id", ondelete="CASCADE"), index=True, nullable=False
    )
    role_id: Mapped[str] = mapped_column(ForeignKey("roles.id"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    business_day: Mapped["BusinessDayRecord"] = relationship(back_populates="slots")

    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_shift_slots_capacity"),
        CheckConstraint("start_at < end_at", name="ck_shift_slots_window"),
    )
