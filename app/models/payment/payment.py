# app/models/payment/payment.py
"""
Payment model.

Append-only ledger entry against a bill. Rows are never updated or
deleted; a bill's paid amount is always the sum of its payments.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.mixins import CreatedAtMixin

if TYPE_CHECKING:
    from app.models.payment.bill import Bill


class Payment(BaseModel, CreatedAtMixin):
    """Single payment recorded against a bill."""

    __tablename__ = "payments"

    bill_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bills.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    method: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="cash",
    )
    reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    recorded_by: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        comment="User who recorded the payment",
    )

    bill: Mapped["Bill"] = relationship(
        "Bill",
        back_populates="payments",
        lazy="select",
    )

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payments_amount_non_negative"),
    )
