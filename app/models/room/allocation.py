# app/models/room/allocation.py
"""
Allocation model.

Assigns a student to a room for an interval. Rows are deactivated on
vacate and never deleted, so the table doubles as occupancy history.
"""

from datetime import date as Date
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Date as SQLDate, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.room.room import Room
    from app.models.student.student import Student


class Allocation(BaseModel, TimestampMixin):
    """Student to room assignment."""

    __tablename__ = "allocations"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    start_date: Mapped[Date] = mapped_column(SQLDate, nullable=False)
    end_date: Mapped[Optional[Date]] = mapped_column(SQLDate, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    # Set on the returned instance when accepted past capacity; not persisted
    over_capacity = False

    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="allocations",
        lazy="select",
    )
    room: Mapped["Room"] = relationship(
        "Room",
        back_populates="allocations",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_allocations_room_active", "room_id", "is_active"),
        Index("ix_allocations_student_active", "student_id", "is_active"),
    )
