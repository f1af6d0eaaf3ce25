# --- File: app/schemas/attendance/attendance.py ---
"""
Attendance schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseSchema
from app.schemas.common.enums import AttendanceSession, AttendanceStatus

__all__ = [
    "AttendanceMark",
    "AttendanceMarkRequest",
    "AttendanceMarkResult",
    "AttendanceSummaryRow",
]


class AttendanceMark(BaseSchema):
    student_id: str
    status: AttendanceStatus


class AttendanceMarkRequest(BaseCreateSchema):
    """Marks for one session of one day. Re-marking a slot overwrites it."""

    date: Date
    session: AttendanceSession
    marks: List[AttendanceMark] = Field(..., min_length=1)


class AttendanceMarkResult(BaseSchema):
    saved: int


class AttendanceSummaryRow(BaseSchema):
    """Tallies for one student on one day."""

    student_id: str
    student_name: str
    date: Date
    present_day: int
    absent_day: int
    present_night: int
    absent_night: int
    present: int
    absent: int
