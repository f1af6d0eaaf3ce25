"""Attendance services."""

from app.services.attendance.attendance_service import AttendanceService, month_bounds

__all__ = ["AttendanceService", "month_bounds"]
