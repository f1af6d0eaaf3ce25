# --- File: app/schemas/common/enums.py ---
"""
Enumeration types exposed through the API.

The values are shared with the database layer so a stored value and its
API representation never diverge.
"""

from app.models.base.enums import (
    AttendanceSession,
    AttendanceStatus,
    BillStatus,
    ComplaintStatus,
    OccupancyStatus,
    RoomStatus,
    UserRole,
)

__all__ = [
    "UserRole",
    "RoomStatus",
    "OccupancyStatus",
    "BillStatus",
    "ComplaintStatus",
    "AttendanceSession",
    "AttendanceStatus",
]
