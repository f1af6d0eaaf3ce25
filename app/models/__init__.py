# models/__init__.py
"""
Database models.

Importing this package registers every mapped class on ``Base.metadata``.
"""

from app.models.attendance import Attendance
from app.models.base import Base, BaseModel
from app.models.complaint import Complaint
from app.models.fee_structure import FeeStructure
from app.models.notification import Notification
from app.models.payment import Bill, Payment
from app.models.room import Allocation, Block, Floor, Room
from app.models.staff import Staff
from app.models.student import Student
from app.models.user import User

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Student",
    "Block",
    "Floor",
    "Room",
    "Allocation",
    "FeeStructure",
    "Bill",
    "Payment",
    "Notification",
    "Staff",
    "Complaint",
    "Attendance",
]
