# app/models/payment/bill.py
"""
Bill model.

One bill per student per calendar month. ``status`` is a cache of the
payment ledger and is rewritten by the billing engine after every payment.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List

from sqlalchemy import Enum, ForeignKey, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import BillStatus
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.payment.payment import Payment
    from app.models.student.student import Student


class Bill(BaseModel, TimestampMixin):
    """Monthly fee bill for a student."""

    __tablename__ = "bills"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    month_year: Mapped[str] = mapped_column(
        String(7),
        nullable=False,
        index=True,
        comment="Billing month as YYYY-MM",
    )

    # Amounts
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )
    discount: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
        default=Decimal("0.00"),
    )
    total: Mapped[Decimal] = mapped_column(
        Numeric(precision=10, scale=2),
        nullable=False,
    )

    status: Mapped[BillStatus] = mapped_column(
        Enum(
            BillStatus,
            name="bill_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=BillStatus.UNPAID,
        index=True,
    )

    student: Mapped["Student"] = relationship(
        "Student",
        back_populates="bills",
        lazy="select",
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="bill",
        lazy="select",
        order_by="Payment.created_at",
    )

    __table_args__ = (
        UniqueConstraint("student_id", "month_year", name="uq_bills_student_month"),
    )

    def __repr__(self) -> str:
        return (
            f"<Bill(id={self.id}, student_id={self.student_id}, "
            f"month_year={self.month_year}, status={self.status.value})>"
        )
