"""Attendance schemas package."""

from app.schemas.attendance.attendance import (
    AttendanceMark,
    AttendanceMarkRequest,
    AttendanceMarkResult,
    AttendanceSummaryRow,
)

__all__ = [
    "AttendanceMark",
    "AttendanceMarkRequest",
    "AttendanceMarkResult",
    "AttendanceSummaryRow",
]
