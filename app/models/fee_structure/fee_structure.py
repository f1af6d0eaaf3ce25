# app/models/fee_structure/fee_structure.py
"""
Fee Structure Model

Named monthly price used as the amount source for batch bill generation.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.mixins import TimestampMixin


class FeeStructure(BaseModel, TimestampMixin):
    """
    Fee Structure Model

    Only the monthly amount takes part in billing. Room and student type
    are descriptive labels for operators choosing a structure.
    """

    __tablename__ = "fee_structures"

    name: Mapped[str] = mapped_column(
        String(150),
        nullable=False,
        index=True,
    )
    room_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    student_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    monthly_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("monthly_amount >= 0", name="ck_fee_structure_amount_positive"),
    )

    def __repr__(self) -> str:
        return f"<FeeStructure(id={self.id}, name={self.name}, monthly_amount={self.monthly_amount})>"
