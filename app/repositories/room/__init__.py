# app/repositories/room/__init__.py
"""
Room repositories package.
"""

from app.repositories.room.allocation_repository import AllocationRepository
from app.repositories.room.room_repository import (
    BlockRepository,
    FloorRepository,
    RoomRepository,
)

__all__ = [
    "BlockRepository",
    "FloorRepository",
    "RoomRepository",
    "AllocationRepository",
]
