# app/models/staff/staff.py
"""
Staff directory model.

Non-login hostel staff (cleaners, electricians, cooks) that complaints can
be assigned to. Staff members are not users and never sign in.
"""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.mixins import TimestampMixin


class Staff(BaseModel, TimestampMixin):
    """Hostel staff member."""

    __tablename__ = "staff"

    name: Mapped[str] = mapped_column(String(150), nullable=False, index=True)
    role: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Job title, e.g. Electrician",
    )
    phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    shift: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<Staff(id={self.id}, name={self.name}, role={self.role})>"
