# --- File: app/schemas/room/__init__.py ---
"""
Room schemas package.
"""

from __future__ import annotations

from app.schemas.room.room_base import (
    AllocateRequest,
    BlockCreate,
    FloorCreate,
    RoomCreate,
    RoomUpdate,
    VacateRequest,
)
from app.schemas.room.room_response import (
    AllocationResponse,
    BlockResponse,
    FloorResponse,
    RoomGridItem,
    RoomResponse,
)

__all__ = [
    "BlockCreate",
    "FloorCreate",
    "RoomCreate",
    "RoomUpdate",
    "AllocateRequest",
    "VacateRequest",
    "BlockResponse",
    "FloorResponse",
    "RoomResponse",
    "RoomGridItem",
    "AllocationResponse",
]
