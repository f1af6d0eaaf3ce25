# app/repositories/payment/payment_repository.py
"""
Payment repository.

Insert and aggregate only; the ledger is append-only.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.payment import Payment
from app.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment ledger entries."""

    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def sum_for_bill(self, bill_id: str) -> Decimal:
        """Total of every payment recorded against a bill."""
        stmt = select(func.coalesce(func.sum(Payment.amount), 0)).where(
            Payment.bill_id == bill_id
        )
        value = self._scalar(stmt)
        return Decimal(str(value or 0))
