# --- File: app/schemas/room/room_response.py ---
"""
Room response schemas.
"""

from __future__ import annotations

from datetime import date as Date
from typing import List, Optional

from pydantic import Field

from app.schemas.common.base import BaseResponseSchema, BaseSchema
from app.schemas.common.enums import RoomStatus

__all__ = [
    "BlockResponse",
    "FloorResponse",
    "RoomResponse",
    "RoomGridItem",
    "AllocationResponse",
]


class BlockResponse(BaseResponseSchema):
    name: str


class FloorResponse(BaseResponseSchema):
    block_id: str
    name: str


class RoomResponse(BaseResponseSchema):
    """Room with its effective status."""

    floor_id: str
    room_number: str
    capacity: int
    status: RoomStatus = Field(..., description="Maintenance override or derived occupancy")
    is_under_maintenance: bool


class RoomGridItem(BaseSchema):
    """
    One cell of the rooms grid.

    ``occupants`` is only populated for Admin and Warden callers.
    """

    id: str
    block_id: str
    block_name: str
    floor_id: str
    floor_name: str
    room_number: str
    capacity: int
    active_count: int
    status: RoomStatus
    occupants: Optional[List[str]] = None


class AllocationResponse(BaseResponseSchema):
    student_id: str
    room_id: str
    start_date: Date
    end_date: Optional[Date] = None
    is_active: bool
    over_capacity: bool = Field(
        default=False,
        description="True when accepted past capacity under the flag policy",
    )
