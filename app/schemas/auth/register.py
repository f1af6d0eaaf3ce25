# --- File: app/schemas/auth/register.py ---
"""
Registration schemas.
Pydantic v2 compliant.
"""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.schemas.common.base import BaseCreateSchema
from app.schemas.common.enums import UserRole

__all__ = [
    "AccountCreate",
    "RegisterRequest",
]


class AccountCreate(BaseCreateSchema):
    """Identity and credentials shared by every way of creating an account."""

    email: EmailStr = Field(
        ...,
        description="Email address (must be unique)",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=8,
        max_length=128,
        description="Password (min 8 chars, must include a letter and a digit)",
    )
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    phone: Optional[str] = Field(
        default=None,
        pattern=r"^\+?[0-9][0-9 \-]{6,20}$",
        description="Phone number",
        examples=["+919876543210"],
    )

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, v: EmailStr) -> str:
        """Normalize email to lowercase."""
        return str(v).lower().strip()

    @field_validator("password", mode="after")
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char.isalpha() for char in v):
            raise ValueError("Password must contain at least one letter")
        return v


class RegisterRequest(AccountCreate):
    """
    User registration request.

    Student-role registrations also create the linked student record, so
    the guardian fields only apply to them.
    """

    role: UserRole = Field(
        default=UserRole.STUDENT,
        description="User role",
    )
    guardian_name: Optional[str] = Field(default=None, max_length=150)
    guardian_phone: Optional[str] = Field(default=None, max_length=30)
    address: Optional[str] = Field(default=None, max_length=500)
