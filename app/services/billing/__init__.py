"""
Billing engine: bills, payments and fee structures.
"""

from app.services.billing.billing_service import (
    BillingService,
    GenerationResult,
    balance,
    derive_bill_status,
    normalize_month,
    to_money,
)

__all__ = [
    "BillingService",
    "GenerationResult",
    "normalize_month",
    "derive_bill_status",
    "balance",
    "to_money",
]
