"""Bill and payment schemas package."""

from app.schemas.payment.payment_request import (
    BillCreate,
    GenerateBillsRequest,
    PaymentCreate,
)
from app.schemas.payment.payment_response import (
    BillResponse,
    BillSummary,
    BillWithBalance,
    GenerationFailure,
    GenerationResultResponse,
    PaymentResponse,
    PaymentResult,
)

__all__ = [
    "BillCreate",
    "GenerateBillsRequest",
    "PaymentCreate",
    "BillResponse",
    "BillWithBalance",
    "BillSummary",
    "PaymentResponse",
    "PaymentResult",
    "GenerationFailure",
    "GenerationResultResponse",
]
