"""Bill and payment repositories package."""

from app.repositories.payment.bill_repository import BillRepository
from app.repositories.payment.payment_repository import PaymentRepository

__all__ = [
    "BillRepository",
    "PaymentRepository",
]
