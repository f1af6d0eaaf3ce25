"""Bill and payment models package."""

from app.models.payment.bill import Bill
from app.models.payment.payment import Payment

__all__ = [
    "Bill",
    "Payment",
]
