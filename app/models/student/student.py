# app/models/student/student.py
"""
Student core model.

Links a Student-role user to the records the ledger keeps about them:
room allocations and monthly bills. No derived state lives here.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.payment.bill import Bill
    from app.models.room.allocation import Allocation
    from app.models.user.user import User


class Student(BaseModel, TimestampMixin):
    """Student record, one per Student-role user."""

    __tablename__ = "students"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    guardian_name: Mapped[Optional[str]] = mapped_column(String(150), nullable=True)
    guardian_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship(
        "User",
        back_populates="student",
        lazy="joined",
    )
    allocations: Mapped[List["Allocation"]] = relationship(
        "Allocation",
        back_populates="student",
        lazy="select",
    )
    bills: Mapped[List["Bill"]] = relationship(
        "Bill",
        back_populates="student",
        lazy="select",
    )
