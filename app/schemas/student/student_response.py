# --- File: app/schemas/student/student_response.py ---
"""
Student response schemas.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "StudentResponse",
    "PlacementResponse",
    "StudentProfileResponse",
]


class StudentResponse(BaseResponseSchema):
    """Student with the identity fields of its user account."""

    user_id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    address: Optional[str] = None

    @classmethod
    def from_student(cls, student) -> "StudentResponse":
        user = student.user
        return cls(
            id=student.id,
            user_id=student.user_id,
            full_name=user.full_name,
            email=user.email,
            phone=user.phone,
            guardian_name=student.guardian_name,
            guardian_phone=student.guardian_phone,
            address=student.address,
        )


class PlacementResponse(BaseSchema):
    """Where a student currently lives."""

    allocation_id: str
    room_id: str
    room_number: str
    floor_name: str
    block_name: str
    start_date: date


class StudentProfileResponse(StudentResponse):
    """Own profile as seen by a student, with the current room if any."""

    allocation: Optional[PlacementResponse] = None

    @classmethod
    def from_profile(cls, student, placement=None) -> "StudentProfileResponse":
        base = StudentResponse.from_student(student).model_dump()
        if placement is None:
            return cls(**base)
        allocation, room, floor, block = placement
        return cls(
            **base,
            allocation=PlacementResponse(
                allocation_id=allocation.id,
                room_id=room.id,
                room_number=room.room_number,
                floor_name=floor.name,
                block_name=block.name,
                start_date=allocation.start_date,
            ),
        )
