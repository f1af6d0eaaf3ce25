"""
Base models package.

Provides the declarative base, mixins and enums for all database models.
"""

from app.models.base.base_model import Base, BaseModel, generate_uuid
from app.models.base.enums import BillStatus, OccupancyStatus, RoomStatus, UserRole
from app.models.base.mixins import CreatedAtMixin, TimestampMixin, utcnow

__all__ = [
    "Base",
    "BaseModel",
    "generate_uuid",
    "TimestampMixin",
    "CreatedAtMixin",
    "utcnow",
    "UserRole",
    "RoomStatus",
    "OccupancyStatus",
    "BillStatus",
]
