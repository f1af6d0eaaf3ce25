# --- File: app/schemas/room/room_base.py ---
"""
Room request schemas: hostel structure, room create/update and the
allocation commands.
"""

from __future__ import annotations

from datetime import date as Date
from typing import Optional

from pydantic import Field, model_validator

from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema
from app.schemas.common.enums import RoomStatus

__all__ = [
    "BlockCreate",
    "FloorCreate",
    "RoomCreate",
    "RoomUpdate",
    "AllocateRequest",
    "VacateRequest",
]


class BlockCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100, examples=["A"])


class FloorCreate(BaseCreateSchema):
    block_id: str = Field(..., description="Block this floor belongs to")
    name: str = Field(..., min_length=1, max_length=100, examples=["Ground"])


class RoomCreate(BaseCreateSchema):
    """New room. Rooms start Vacant."""

    floor_id: str = Field(..., description="Floor this room belongs to")
    room_number: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Room number/identifier (e.g., '101', 'A-201')",
        examples=["101", "A-201"],
    )
    capacity: int = Field(default=1, gt=0, le=100, description="Number of beds")


class RoomUpdate(BaseUpdateSchema):
    """
    Partial room update.

    ``status`` may only set or clear the maintenance override. Any value
    other than Maintenance is replaced by the status derived from occupancy.
    """

    room_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    capacity: Optional[int] = Field(default=None, gt=0, le=100)
    status: Optional[RoomStatus] = Field(default=None)
    floor_id: Optional[str] = Field(default=None)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "RoomUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class AllocateRequest(BaseSchema):
    student_id: str = Field(..., description="Student to place")
    room_id: str = Field(..., description="Target room")
    start_date: Optional[Date] = Field(
        default=None,
        description="Allocation start date (defaults to today)",
    )


class VacateRequest(BaseSchema):
    allocation_id: str = Field(..., description="Allocation to end")
    end_date: Optional[Date] = Field(
        default=None,
        description="Allocation end date (defaults to today)",
    )
