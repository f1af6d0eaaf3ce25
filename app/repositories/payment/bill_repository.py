# app/repositories/payment/bill_repository.py
"""
Bill repository.

Listing queries join each bill to the sum of its payments so callers get
the paid amount from the ledger rather than from the cached status.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from app.models.payment import Bill, Payment
from app.repositories.base.base_repository import BaseRepository


class BillRepository(BaseRepository[Bill]):
    """Repository for monthly bills."""

    def __init__(self, db: Session):
        super().__init__(Bill, db)

    def find_by_student_and_month(self, student_id: str, month_year: str) -> Optional[Bill]:
        stmt = select(Bill).where(
            Bill.student_id == student_id,
            Bill.month_year == month_year,
        )
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def list_with_paid(self, student_id: Optional[str] = None) -> List[tuple]:
        """
        Bills with the aggregated paid amount, newest first.

        Args:
            student_id: Restrict to one student's bills

        Returns:
            List of ``(Bill, paid)`` tuples
        """
        paid = (
            select(
                Payment.bill_id.label("bill_id"),
                func.sum(Payment.amount).label("paid"),
            )
            .group_by(Payment.bill_id)
            .subquery()
        )
        stmt = (
            select(Bill, func.coalesce(paid.c.paid, 0))
            .outerjoin(paid, paid.c.bill_id == Bill.id)
            .options(joinedload(Bill.student))
            .order_by(Bill.month_year.desc(), Bill.created_at.desc())
        )
        if student_id:
            stmt = stmt.where(Bill.student_id == student_id)
        return self._rows(stmt)

    def count_for_student(self, student_id: str) -> int:
        stmt = select(func.count(Bill.id)).where(Bill.student_id == student_id)
        return int(self._scalar(stmt) or 0)
