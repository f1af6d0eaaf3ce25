# --- File: app/schemas/payment/payment_response.py ---
"""
Bill and payment response schemas.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.schemas.common.base import BaseResponseSchema, BaseSchema
from app.schemas.common.enums import BillStatus

__all__ = [
    "BillResponse",
    "BillWithBalance",
    "BillSummary",
    "PaymentResponse",
    "PaymentResult",
    "GenerationFailure",
    "GenerationResultResponse",
]


class BillResponse(BaseResponseSchema):
    student_id: str
    month_year: str
    amount: Decimal
    discount: Decimal
    total: Decimal
    status: BillStatus
    created_at: datetime


class BillWithBalance(BillResponse):
    """Bill joined to its payment ledger."""

    student_name: Optional[str] = None
    paid: Decimal = Field(..., description="Sum of all payments")
    balance: Decimal = Field(..., description="Outstanding amount, never negative")


class BillSummary(BaseSchema):
    bill_id: str
    total: Decimal
    paid: Decimal
    balance: Decimal
    status: BillStatus


class PaymentResponse(BaseResponseSchema):
    bill_id: str
    amount: Decimal
    method: str
    reference: Optional[str] = None
    recorded_by: Optional[str] = None
    created_at: datetime


class PaymentResult(BaseSchema):
    payment: PaymentResponse
    bill: BillSummary


class GenerationFailure(BaseSchema):
    student_id: str
    reason: str


class GenerationResultResponse(BaseSchema):
    """Outcome of a monthly batch run."""

    month_year: str
    created: int = 0
    skipped_duplicate: int = 0
    failed: List[GenerationFailure] = Field(default_factory=list)
