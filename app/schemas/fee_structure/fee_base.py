# --- File: app/schemas/fee_structure/fee_base.py ---
"""
Fee structure schemas.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Optional

from pydantic import Field

from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = [
    "FeeStructureCreate",
    "FeeStructureResponse",
]

MoneyAmount = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class FeeStructureCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=150, examples=["Standard double"])
    room_type: Optional[str] = Field(default=None, max_length=50)
    student_type: Optional[str] = Field(default=None, max_length=50)
    monthly_amount: MoneyAmount = Field(..., description="Monthly fee")


class FeeStructureResponse(BaseResponseSchema):
    name: str
    room_type: Optional[str] = None
    student_type: Optional[str] = None
    monthly_amount: Decimal
    is_active: bool
