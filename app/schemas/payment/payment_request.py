# --- File: app/schemas/payment/payment_request.py ---
"""
Bill and payment request schemas.

Months are accepted as ``YYYY-MM`` or ``YYYY-MM-DD`` and normalized by the
billing engine.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema
from app.schemas.fee_structure.fee_base import MoneyAmount

__all__ = [
    "BillCreate",
    "GenerateBillsRequest",
    "PaymentCreate",
]


class BillCreate(BaseCreateSchema):
    student_id: str = Field(..., description="Student to bill")
    month: str = Field(..., min_length=7, max_length=10, examples=["2024-05"])
    amount: MoneyAmount = Field(..., description="Gross amount")
    discount: MoneyAmount = Field(default=Decimal("0"), description="Discount")


class GenerateBillsRequest(BaseCreateSchema):
    month: str = Field(..., min_length=7, max_length=10, examples=["2024-05"])
    fee_structure_id: str = Field(..., description="Fee structure supplying the amount")


class PaymentCreate(BaseCreateSchema):
    """
    Payment against a bill.

    Zero is accepted and recorded; overpayment is accepted.
    """

    bill_id: str = Field(..., description="Bill being paid")
    amount: MoneyAmount = Field(..., description="Amount paid")
    method: str = Field(default="cash", min_length=1, max_length=30, examples=["cash", "upi"])
    reference: Optional[str] = Field(default=None, max_length=100)
