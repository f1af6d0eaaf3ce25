"""Attendance models package."""

from app.models.attendance.attendance import Attendance

__all__ = ["Attendance"]
