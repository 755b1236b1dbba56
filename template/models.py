from __future__ import annotations
from datetime import date, datetime, time
from typing import List
from sqlalchemy import String, Text, Integer, Date, Time, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from core.database import Base

class TemplateRecord(Base):
    __tablename__ = "templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(ForeignKey("tenants.id", ondelete="CASCADE"), index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    recurrence: Mapped[str] = mapped_column(String(16), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    weekday: Mapped[int] = mapped_column(Integer, nullable=False)
    response_deadline_hours: Mapped[int] = mapped_column(Integer, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # relationships
    slots: Mapped[List["TemplateSlotRecord"]] = relationship(
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateSlotRecord.position",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("weekday BETWEEN 0 AND 6", name="ck_templates_weekday"),
        CheckConstraint("recurrence IN ('none', 'weekly', 'biweekly')", name="ck_templates_recurrence"),
    )


class TemplateSlotRecord(Base):
    __tablename__ = "template_slots"

    id: Mapped[int] = mapped_column(primary_key=True)
    template_id: Mapped[str] = mapped_column(ForeignKey("templates.id", ondelete="CASCADE"), index=True, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    role_id: Mapped[str] = mapped_column(ForeignKey("roles.id"), index=True, nullable=False)
    start_time: Mapped[time] = mapped_column(Time, nullable=False)
    end_time: Mapped[time] = mapped_column(Time, nullable=False)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    template: Mapped["TemplateRecord"] = relationship(back_populates="slots")

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_template_slots_window"),
        CheckConstraint("capacity IS NULL OR capacity >= 1", name="ck_template_slots_capacity"),
    )
