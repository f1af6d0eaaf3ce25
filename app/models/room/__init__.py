"""Room models package."""

from app.models.room.allocation import Allocation
from app.models.room.room import Block, Floor, Room

__all__ = [
    "Block",
    "Floor",
    "Room",
    "Allocation",
]
