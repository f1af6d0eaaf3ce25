# --- File: app/schemas/complaint/complaint.py ---
"""
Complaint schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema
from app.schemas.common.enums import ComplaintStatus

__all__ = [
    "ComplaintCreate",
    "ComplaintStatusUpdate",
    "ComplaintResponse",
]


class ComplaintCreate(BaseCreateSchema):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)
    photo_url: Optional[str] = Field(default=None, max_length=500)


class ComplaintStatusUpdate(BaseUpdateSchema):
    """
    Staff triage of a complaint.

    ``assigned_to_staff_id`` is only changed when present in the request;
    an explicit null clears the assignment.
    """

    status: ComplaintStatus
    assigned_to_staff_id: Optional[str] = None


class ComplaintResponse(BaseResponseSchema):
    student_id: str
    student_name: str
    title: str
    description: Optional[str] = None
    photo_url: Optional[str] = None
    status: ComplaintStatus
    assigned_to_staff_id: Optional[str] = None
    assigned_staff_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_complaint(cls, complaint) -> "ComplaintResponse":
        staff = complaint.assigned_staff
        return cls(
            id=complaint.id,
            student_id=complaint.student_id,
            student_name=complaint.student.user.full_name,
            title=complaint.title,
            description=complaint.description,
            photo_url=complaint.photo_url,
            status=complaint.status,
            assigned_to_staff_id=complaint.assigned_to_staff_id,
            assigned_staff_name=staff.name if staff is not None else None,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
        )
