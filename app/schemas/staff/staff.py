# --- File: app/schemas/staff/staff.py ---
"""
Staff directory schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseUpdateSchema

__all__ = [
    "StaffCreate",
    "StaffUpdate",
    "StaffResponse",
]


class StaffCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=150)
    role: str = Field(..., min_length=1, max_length=100, examples=["Electrician"])
    phone: Optional[str] = Field(default=None, max_length=30)
    shift: Optional[str] = Field(default=None, max_length=50, examples=["Morning"])


class StaffUpdate(BaseUpdateSchema):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    role: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=30)
    shift: Optional[str] = Field(default=None, max_length=50)


class StaffResponse(BaseResponseSchema):
    name: str
    role: str
    phone: Optional[str] = None
    shift: Optional[str] = None
