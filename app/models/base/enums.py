"""
Database enums shared by models and schemas.
"""

import enum


class UserRole(str, enum.Enum):
    """User role enumeration."""
    ADMIN = "Admin"
    WARDEN = "Warden"
    STUDENT = "Student"


class RoomStatus(str, enum.Enum):
    """
    Room status as seen by clients.

    MAINTENANCE is an operator-set override; the other three values are
    derived from occupancy.
    """
    VACANT = "Vacant"
    PARTIAL = "Partial"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"


class OccupancyStatus(str, enum.Enum):
    """Derived room state persisted by the occupancy engine."""
    VACANT = "Vacant"
    PARTIAL = "Partial"
    OCCUPIED = "Occupied"


class BillStatus(str, enum.Enum):
    """Bill settlement status derived from the payment ledger."""
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"


class ComplaintStatus(str, enum.Enum):
    """Complaint workflow state, set by staff."""
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    RESOLVED = "Resolved"


class AttendanceSession(str, enum.Enum):
    DAY = "Day"
    NIGHT = "Night"


class AttendanceStatus(str, enum.Enum):
    PRESENT = "Present"
    ABSENT = "Absent"


__all__ = [
    "UserRole",
    "RoomStatus",
    "OccupancyStatus",
    "BillStatus",
    "ComplaintStatus",
    "AttendanceSession",
    "AttendanceStatus",
]
