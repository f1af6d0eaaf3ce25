# --- File: app/schemas/student/student_request.py ---
"""
Student request schemas.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from app.schemas.auth.register import AccountCreate
from app.schemas.common.base import BaseUpdateSchema

__all__ = [
    "StudentCreate",
    "StudentUpdate",
]


class StudentCreate(AccountCreate):
    """Admin-created student account; the role is always Student."""

    guardian_name: Optional[str] = Field(default=None, max_length=150)
    guardian_phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)


class StudentUpdate(BaseUpdateSchema):
    """Partial profile update. Email, password and role are not editable here."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(default=None, pattern=r"^\+?[0-9][0-9 \-]{6,20}$")
    guardian_name: Optional[str] = Field(default=None, max_length=150)
    guardian_phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)
