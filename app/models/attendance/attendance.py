# app/models/attendance/attendance.py
"""
Attendance model.

One mark per student, date and session (Day or Night). Marking the same
slot again overwrites the status.
"""

from datetime import date as Date
from typing import TYPE_CHECKING

from sqlalchemy import Date as SQLDate, Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import AttendanceSession, AttendanceStatus
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.student.student import Student


class Attendance(BaseModel, TimestampMixin):
    """Attendance mark for one session of one day."""

    __tablename__ = "attendance"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[Date] = mapped_column(SQLDate, nullable=False, index=True)
    session: Mapped[AttendanceSession] = mapped_column(
        Enum(
            AttendanceSession,
            name="attendance_session_enum",
            native_enum=False,
            length=10,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )
    status: Mapped[AttendanceStatus] = mapped_column(
        Enum(
            AttendanceStatus,
            name="attendance_status_enum",
            native_enum=False,
            length=10,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
    )

    student: Mapped["Student"] = relationship("Student", lazy="select")

    __table_args__ = (
        UniqueConstraint("student_id", "date", "session", name="uq_attendance_slot"),
    )
