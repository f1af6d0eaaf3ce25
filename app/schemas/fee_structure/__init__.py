"""Fee structure schemas package."""

from app.schemas.fee_structure.fee_base import (
    FeeStructureCreate,
    FeeStructureResponse,
    MoneyAmount,
)

__all__ = [
    "MoneyAmount",
    "FeeStructureCreate",
    "FeeStructureResponse",
]
