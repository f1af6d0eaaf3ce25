"""
Billing engine.

Bills are unique per student and month. A bill's status is a cache of its
payment ledger: every payment re-derives it from the full payment sum, so
the cached value can never drift from the ledger.
"""

import re
from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    AuthorizationError,
    BaseAppException,
    BillNotFoundError,
    DatabaseError,
    DuplicateBillError,
    DuplicateEntryError,
    FeeStructureNotFoundError,
    StudentNotFoundError,
    ValidationError,
)
from app.core.locks import EntityLockRegistry, entity_locks
from app.models.base.enums import BillStatus, UserRole
from app.models.fee_structure import FeeStructure
from app.models.payment import Bill, Payment
from app.models.student import Student
from app.models.user import User
from app.repositories.fee_structure import FeeStructureRepository
from app.repositories.payment import BillRepository, PaymentRepository
from app.repositories.student import StudentRepository
from app.schemas.fee_structure import FeeStructureCreate
from app.schemas.payment import BillSummary, BillWithBalance, PaymentResponse, PaymentResult
from app.services.base import BaseService
from app.services.notification import NotificationService

BILL_LOCK = "bill"

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})(?:-(\d{2}))?$")
MAX_METHOD_LENGTH = 30

Money = Union[Decimal, int, float, str]


def to_money(value: Money) -> Decimal:
    """Quantize to cents."""
    try:
        return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Invalid amount: {value!r}")


def normalize_month(value: Union[str, date, datetime]) -> str:
    """
    Normalize a month to ``YYYY-MM``.

    Accepts ``YYYY-MM``, ``YYYY-MM-DD`` or a date. The day, if any, is
    validated and then discarded.
    """
    if isinstance(value, (date, datetime)):
        return f"{value.year:04d}-{value.month:02d}"

    text = str(value or "").strip()
    match = MONTH_PATTERN.match(text)
    if not match:
        raise ValidationError(
            "Month must be YYYY-MM or YYYY-MM-DD",
            field_errors={"month": [f"invalid month {text!r}"]},
        )

    year, month, day = match.groups()
    try:
        date(int(year), int(month), int(day or 1))
    except ValueError:
        raise ValidationError(
            "Month must be YYYY-MM or YYYY-MM-DD",
            field_errors={"month": [f"invalid month {text!r}"]},
        )
    return f"{year}-{month}"


def derive_bill_status(total: Decimal, paid: Decimal) -> BillStatus:
    if paid <= 0:
        return BillStatus.UNPAID
    if paid < total:
        return BillStatus.PARTIAL
    return BillStatus.PAID


def balance(total: Decimal, paid: Decimal) -> Decimal:
    """Outstanding amount, clamped at zero for overpaid bills."""
    return max(ZERO, to_money(total) - to_money(paid))


@dataclass
class GenerationResult:
    """Outcome of a monthly batch: created, skipped duplicates and failures."""

    month_year: str
    created: int = 0
    skipped_duplicate: int = 0
    failed: List[Dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BillingService(BaseService):
    """Bills, payments and fee structures."""

    def __init__(
        self,
        db_session: Session,
        notifications: Optional[NotificationService] = None,
        locks: Optional[EntityLockRegistry] = None,
    ):
        super().__init__(db_session)
        self.bills = BillRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.students = StudentRepository(db_session)
        self.fee_structures = FeeStructureRepository(db_session)
        self.notifications = notifications
        self.locks = locks or entity_locks

    # ------------------------------------------------------------------ #
    # Bills
    # ------------------------------------------------------------------ #
    def create_bill(
        self,
        student_id: str,
        month: Union[str, date],
        amount: Money,
        discount: Money = ZERO,
    ) -> Bill:
        """
        Create a bill with total = max(0, amount - discount).

        Raises:
            ValidationError: bad month or negative amounts
            StudentNotFoundError: unknown student
            DuplicateBillError: a bill already exists for the month
        """
        month_year = normalize_month(month)
        amount = to_money(amount)
        discount = to_money(discount)
        if amount < 0 or discount < 0:
            raise ValidationError("Amount and discount must not be negative")

        with self.transaction():
            bill = self._insert_bill(student_id, month_year, amount, discount)

        self._logger.info(
            "Bill created",
            extra={
                "bill_id": bill.id,
                "student_id": student_id,
                "month_year": month_year,
                "total": str(bill.total),
            },
        )
        self._notify_bills([bill])
        return bill

    def _insert_bill(
        self,
        student_id: str,
        month_year: str,
        amount: Decimal,
        discount: Decimal,
    ) -> Bill:
        if self.students.find_by_id(student_id) is None:
            raise StudentNotFoundError(student_id)
        if self.bills.find_by_student_and_month(student_id, month_year):
            raise DuplicateBillError(student_id, month_year)

        try:
            return self.bills.create(
                Bill(
                    student_id=student_id,
                    month_year=month_year,
                    amount=amount,
                    discount=discount,
                    total=max(ZERO, amount - discount),
                    status=BillStatus.UNPAID,
                )
            )
        except DuplicateEntryError as e:
            # Lost a race with a concurrent insert for the same month
            raise DuplicateBillError(student_id, month_year) from e

    def generate_monthly(self, month: Union[str, date], fee_structure_id: str) -> GenerationResult:
        """
        Bill every student for a month from a fee structure.

        Each student's insert runs in its own savepoint, so a duplicate or a
        storage failure for one student never affects the others.
        """
        month_year = normalize_month(month)
        fee_structure = self.fee_structures.find_active_by_id(fee_structure_id)
        if fee_structure is None:
            raise FeeStructureNotFoundError(fee_structure_id)
        amount = to_money(fee_structure.monthly_amount)

        result = GenerationResult(month_year=month_year)
        created: List[Bill] = []

        with self.transaction():
            for student_id in self.students.list_all_ids():
                try:
                    with self.db.begin_nested():
                        bill = self._insert_bill(student_id, month_year, amount, ZERO)
                except DuplicateBillError:
                    result.skipped_duplicate += 1
                except (StudentNotFoundError, DatabaseError, SQLAlchemyError) as e:
                    reason = e.message if isinstance(e, BaseAppException) else type(e).__name__
                    result.failed.append({"student_id": student_id, "reason": reason})
                    self._logger.error(
                        "Bill generation failed for student",
                        exc_info=True,
                        extra={"student_id": student_id, "month_year": month_year},
                    )
                else:
                    result.created += 1
                    created.append(bill)

        self._logger.info(
            "Monthly bills generated",
            extra={
                "month_year": month_year,
                "fee_structure_id": fee_structure_id,
                "created": result.created,
                "skipped_duplicate": result.skipped_duplicate,
                "failed": len(result.failed),
            },
        )
        self._notify_bills(created)
        return result

    def list_bills_with_balance(self) -> List[BillWithBalance]:
        return [self._bill_view(bill, paid) for bill, paid in self.bills.list_with_paid()]

    def list_my_bills(self, user_id: str) -> List[BillWithBalance]:
        """Bills of the student record linked to a user; empty if there is none."""
        student = self.students.find_by_user_id(user_id)
        if student is None:
            return []
        return [
            self._bill_view(bill, paid)
            for bill, paid in self.bills.list_with_paid(student_id=student.id)
        ]

    def _bill_view(self, bill: Bill, paid: Any) -> BillWithBalance:
        paid = to_money(paid or 0)
        student = bill.student
        return BillWithBalance(
            id=bill.id,
            student_id=bill.student_id,
            student_name=student.user.full_name if student and student.user else None,
            month_year=bill.month_year,
            amount=to_money(bill.amount),
            discount=to_money(bill.discount),
            total=to_money(bill.total),
            status=bill.status,
            created_at=bill.created_at,
            paid=paid,
            balance=balance(bill.total, paid),
        )

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #
    def pay(
        self,
        bill_id: str,
        amount: Money,
        acting_user: User,
        method: str = "cash",
        reference: Optional[str] = None,
    ) -> PaymentResult:
        """
        Record a payment and re-derive the bill status from the full ledger.

        Students may only pay bills on their own student record. The insert
        and the status write commit together under the bill lock.

        Raises:
            ValidationError: negative amount or bad method
            BillNotFoundError: unknown bill
            AuthorizationError: a student paying someone else's bill
        """
        amount = to_money(amount)
        if amount < 0:
            raise ValidationError("Payment amount must not be negative")
        method = (method or "cash").strip()
        if not method or len(method) > MAX_METHOD_LENGTH:
            raise ValidationError(f"Payment method must be 1-{MAX_METHOD_LENGTH} characters")

        acting_user_id = acting_user.id
        paid_by_student = acting_user.role == UserRole.STUDENT

        self._close_open_transaction()
        with self.locks.hold(BILL_LOCK, bill_id):
            with self.transaction():
                bill = self.bills.lock_by_id(bill_id)
                if bill is None:
                    raise BillNotFoundError(bill_id)
                if paid_by_student:
                    own = self.students.find_by_user_id(acting_user_id)
                    if own is None or own.id != bill.student_id:
                        raise AuthorizationError("You can only pay your own bills")

                payment = self.payments.create(
                    Payment(
                        bill_id=bill_id,
                        amount=amount,
                        method=method,
                        reference=reference,
                        recorded_by=acting_user_id,
                    )
                )
                paid = self.payments.sum_for_bill(bill_id)
                total = to_money(bill.total)
                status = derive_bill_status(total, paid)
                previous_status = bill.status
                if previous_status != status:
                    bill.status = status
                    self.db.flush()

                summary = BillSummary(
                    bill_id=bill_id,
                    total=total,
                    paid=to_money(paid),
                    balance=balance(total, paid),
                    status=status,
                )
                student = bill.student
                month_year = bill.month_year

            result = PaymentResult(payment=PaymentResponse.model_validate(payment), bill=summary)

        self._logger.info(
            "Payment recorded",
            extra={
                "bill_id": bill_id,
                "payment_id": result.payment.id,
                "amount": str(amount),
                "payment_method": method,
                "from_status": previous_status.value,
                "to_status": status.value,
                "recorded_by": acting_user_id,
            },
        )
        self._notify_payment(
            student, result, month_year, paid_by_student=paid_by_student
        )
        return result

    # ------------------------------------------------------------------ #
    # Fee structures
    # ------------------------------------------------------------------ #
    def list_fee_structures(self) -> List[FeeStructure]:
        return self.fee_structures.list_active()

    def create_fee_structure(self, data: FeeStructureCreate) -> FeeStructure:
        with self.transaction():
            fee_structure = self.fee_structures.create(
                FeeStructure(
                    name=data.name,
                    room_type=data.room_type,
                    student_type=data.student_type,
                    monthly_amount=to_money(data.monthly_amount),
                    is_active=True,
                )
            )
        self._logger.info(
            "Fee structure created",
            extra={"fee_structure_id": fee_structure.id, "fee_name": data.name},
        )
        return fee_structure

    # ------------------------------------------------------------------ #
    # Notifications
    # ------------------------------------------------------------------ #
    def _notify_bills(self, bills: List[Bill]) -> None:
        if self.notifications is None or not bills:
            return
        try:
            for bill in bills:
                student: Student = bill.student
                self.notifications.notify_user(
                    student.user_id,
                    "New bill",
                    f"Your bill for {bill.month_year} is {to_money(bill.total)}",
                    "/fees",
                )
                self.notifications.email_user(
                    student.user,
                    "bill_created",
                    {
                        "month_year": bill.month_year,
                        "total": to_money(bill.total),
                        "discount": to_money(bill.discount),
                    },
                )
        except Exception as e:
            self._logger.warning(f"Bill notification failed after commit: {e}", exc_info=True)

    def _notify_payment(
        self,
        student: Optional[Student],
        result: PaymentResult,
        month_year: str,
        paid_by_student: bool = False,
    ) -> None:
        if self.notifications is None or student is None:
            return
        try:
            self.notifications.notify_user(
                student.user_id,
                "Payment received",
                f"{result.payment.amount} received for {month_year}; status {result.bill.status.value}",
                "/fees",
            )
            self.notifications.email_user(
                student.user,
                "payment_received",
                {
                    "month_year": month_year,
                    "amount": result.payment.amount,
                    "method": result.payment.method,
                    "status": result.bill.status.value,
                    "balance": result.bill.balance,
                },
            )
            if paid_by_student:
                # Staff hear about payments students make themselves
                self.notifications.notify_roles(
                    f"Payment from {student.user.full_name}",
                    f"{result.payment.amount} for {month_year} via {result.payment.method}",
                    "/fees",
                )
        except Exception as e:
            self._logger.warning(f"Payment notification failed after commit: {e}", exc_info=True)
