"""
Tests for bills, payments and monthly generation.
"""
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from app.core.exceptions import (
    AuthorizationError,
    BillNotFoundError,
    DatabaseError,
    DuplicateBillError,
    FeeStructureNotFoundError,
    StudentNotFoundError,
    ValidationError,
)
from app.models import Bill, Notification, Payment
from app.models.base.enums import BillStatus
from app.services.billing import (
    BillingService,
    balance,
    derive_bill_status,
    normalize_month,
    to_money,
)
from app.services.notification import NotificationHub, NotificationService


class TestMoneyHelpers:
    @pytest.mark.parametrize(
        "total,paid,expected",
        [
            ("1000", "0", BillStatus.UNPAID),
            ("1000", "400", BillStatus.PARTIAL),
            ("1000", "1000", BillStatus.PAID),
            ("1000", "1050", BillStatus.PAID),
            ("0", "0", BillStatus.UNPAID),
            ("0", "10", BillStatus.PAID),
        ],
    )
    def test_derive_bill_status(self, total, paid, expected):
        assert derive_bill_status(Decimal(total), Decimal(paid)) == expected

    def test_balance_never_negative(self):
        assert balance(Decimal("1000"), Decimal("400")) == Decimal("600.00")
        assert balance(Decimal("1000"), Decimal("1050")) == Decimal("0.00")

    def test_to_money_rounds_to_cents(self):
        assert to_money("10.005") == Decimal("10.01")
        assert to_money(7) == Decimal("7.00")
        with pytest.raises(ValidationError):
            to_money("ten")


class TestNormalizeMonth:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-05", "2024-05"),
            ("2024-05-17", "2024-05"),
            (" 2024-12 ", "2024-12"),
            (date(2024, 2, 29), "2024-02"),
        ],
    )
    def test_accepted_forms(self, value, expected):
        assert normalize_month(value) == expected

    @pytest.mark.parametrize("value", ["2024-13", "May 2024", "2024-02-30", "", "24-05"])
    def test_rejected_forms(self, value):
        with pytest.raises(ValidationError):
            normalize_month(value)


class TestCreateBill:
    def test_total_applies_discount(self, db_session, student):
        bill = BillingService(db_session).create_bill(student.id, "2024-05-03", 1000, 150)

        assert bill.month_year == "2024-05"
        assert bill.total == Decimal("850.00")
        assert bill.status == BillStatus.UNPAID

    def test_total_is_clamped_at_zero(self, db_session, student):
        bill = BillingService(db_session).create_bill(student.id, "2024-05", 100, 250)
        assert bill.total == Decimal("0.00")

    def test_negative_amount_rejected(self, db_session, student):
        with pytest.raises(ValidationError):
            BillingService(db_session).create_bill(student.id, "2024-05", -1)

    def test_duplicate_month(self, db_session, student):
        service = BillingService(db_session)
        first = service.create_bill(student.id, "2024-05", 1000)

        with pytest.raises(DuplicateBillError) as exc_info:
            service.create_bill(student.id, "2024-05-20", 500)

        assert exc_info.value.status_code == 409
        db_session.refresh(first)
        assert first.total == Decimal("1000.00")
        assert db_session.scalar(select(func.count(Bill.id))) == 1

    def test_unknown_student(self, db_session):
        with pytest.raises(StudentNotFoundError):
            BillingService(db_session).create_bill("missing", "2024-05", 1000)

    def test_student_is_notified(self, db_session, student):
        notifications = NotificationService(db_session, hub=NotificationHub())
        BillingService(db_session, notifications=notifications).create_bill(
            student.id, "2024-05", 1000
        )
        titles = db_session.scalars(
            select(Notification.title).where(Notification.user_id == student.user_id)
        ).all()
        assert titles == ["New bill"]


class TestPay:
    def test_partial_then_full_then_overpay(self, db_session, student, admin_user):
        service = BillingService(db_session)
        bill = service.create_bill(student.id, "2024-05", 1000)

        result = service.pay(bill.id, 400, acting_user=admin_user)
        assert result.bill.status == BillStatus.PARTIAL
        assert result.bill.balance == Decimal("600.00")

        result = service.pay(bill.id, 600, acting_user=admin_user, method="upi", reference="TX1")
        assert result.bill.status == BillStatus.PAID
        assert result.bill.balance == Decimal("0.00")
        assert result.payment.method == "upi"
        assert result.payment.reference == "TX1"

        result = service.pay(bill.id, 50, acting_user=admin_user)
        assert result.bill.status == BillStatus.PAID
        assert result.bill.paid == Decimal("1050.00")
        assert result.bill.balance == Decimal("0.00")

        db_session.refresh(bill)
        assert bill.status == BillStatus.PAID
        assert db_session.scalar(
            select(func.count(Payment.id)).where(Payment.bill_id == bill.id)
        ) == 3

    def test_zero_payment_is_recorded(self, db_session, student, admin_user):
        service = BillingService(db_session)
        bill = service.create_bill(student.id, "2024-05", 1000)

        result = service.pay(bill.id, 0, acting_user=admin_user)

        assert result.bill.status == BillStatus.UNPAID
        assert result.payment.amount == Decimal("0.00")
        assert result.payment.recorded_by == admin_user.id

    def test_invalid_input(self, db_session, student, admin_user):
        service = BillingService(db_session)
        bill = service.create_bill(student.id, "2024-05", 1000)

        with pytest.raises(ValidationError):
            service.pay(bill.id, -5, acting_user=admin_user)
        with pytest.raises(ValidationError):
            service.pay(bill.id, 5, acting_user=admin_user, method="x" * 31)
        with pytest.raises(BillNotFoundError):
            service.pay("missing", 5, acting_user=admin_user)

    def test_student_pays_own_bill_only(self, db_session, student_factory):
        owner, other = student_factory(), student_factory()
        service = BillingService(db_session)
        bill = service.create_bill(owner.id, "2024-05", 1000)

        result = service.pay(bill.id, 100, acting_user=owner.user)
        assert result.bill.status == BillStatus.PARTIAL

        with pytest.raises(AuthorizationError):
            service.pay(bill.id, 100, acting_user=other.user)
        assert db_session.scalar(
            select(func.count(Payment.id)).where(Payment.bill_id == bill.id)
        ) == 1


class TestGenerateMonthly:
    def test_second_run_skips_everything(self, db_session, student_factory, fee_structure):
        students = [student_factory() for _ in range(3)]
        service = BillingService(db_session)

        first = service.generate_monthly("2024-05", fee_structure.id)
        assert (first.created, first.skipped_duplicate, first.failed) == (3, 0, [])

        second = service.generate_monthly("2024-05-01", fee_structure.id)
        assert (second.created, second.skipped_duplicate, second.failed) == (0, 3, [])

        totals = db_session.scalars(select(Bill.total)).all()
        assert len(totals) == len(students)
        assert all(total == Decimal("1000.00") for total in totals)

    def test_existing_bill_is_skipped(self, db_session, student_factory, fee_structure):
        billed, fresh = student_factory(), student_factory()
        service = BillingService(db_session)
        service.create_bill(billed.id, "2024-05", 700)

        result = service.generate_monthly("2024-05", fee_structure.id)

        assert result.created == 1
        assert result.skipped_duplicate == 1
        assert db_session.scalar(
            select(Bill.total).where(Bill.student_id == billed.id)
        ) == Decimal("700.00")
        assert db_session.scalar(
            select(Bill.total).where(Bill.student_id == fresh.id)
        ) == Decimal("1000.00")

    def test_failure_is_reported_per_student(
        self, db_session, student_factory, fee_structure, monkeypatch
    ):
        students = [student_factory() for _ in range(3)]
        broken = students[1]
        service = BillingService(db_session)
        original_create = service.bills.create

        def flaky_create(bill):
            if bill.student_id == broken.id:
                raise DatabaseError("disk full")
            return original_create(bill)

        monkeypatch.setattr(service.bills, "create", flaky_create)

        result = service.generate_monthly("2024-05", fee_structure.id)

        assert result.created == 2
        assert result.skipped_duplicate == 0
        assert result.failed == [{"student_id": broken.id, "reason": "disk full"}]
        billed = set(db_session.scalars(select(Bill.student_id)).all())
        assert billed == {students[0].id, students[2].id}

    def test_inactive_fee_structure(self, db_session, student, fee_structure):
        fee_structure.is_active = False
        db_session.commit()
        with pytest.raises(FeeStructureNotFoundError):
            BillingService(db_session).generate_monthly("2024-05", fee_structure.id)

    def test_result_serializes(self, db_session, student, fee_structure):
        result = BillingService(db_session).generate_monthly(date(2024, 5, 9), fee_structure.id)
        assert result.to_dict() == {
            "month_year": "2024-05",
            "created": 1,
            "skipped_duplicate": 0,
            "failed": [],
        }


class TestListings:
    def test_bills_with_balance(self, db_session, student, admin_user):
        service = BillingService(db_session)
        bill = service.create_bill(student.id, "2024-05", 1000)
        service.pay(bill.id, 250, acting_user=admin_user)

        [view] = service.list_bills_with_balance()

        assert view.paid == Decimal("250.00")
        assert view.balance == Decimal("750.00")
        assert view.student_name == student.user.full_name

    def test_my_bills(self, db_session, student_factory, admin_user):
        mine, theirs = student_factory(), student_factory()
        service = BillingService(db_session)
        service.create_bill(mine.id, "2024-04", 1000)
        service.create_bill(mine.id, "2024-05", 1000)
        service.create_bill(theirs.id, "2024-05", 1000)

        bills = service.list_my_bills(mine.user_id)

        assert {b.month_year for b in bills} == {"2024-04", "2024-05"}
        assert all(b.student_id == mine.id for b in bills)

    def test_my_bills_without_student_record(self, db_session, admin_user):
        assert BillingService(db_session).list_my_bills(admin_user.id) == []


class TestPaymentNotifications:
    def test_student_payment_notifies_staff(self, db_session, student, admin_user, warden_user):
        notifications = NotificationService(db_session, hub=NotificationHub())
        service = BillingService(db_session, notifications=notifications)
        bill = service.create_bill(student.id, "2024-05", 1000)

        service.pay(bill.id, 1000, acting_user=student.user)

        staff_titles = db_session.scalars(
            select(Notification.title).where(
                Notification.user_id.in_([admin_user.id, warden_user.id])
            )
        ).all()
        assert len(staff_titles) == 2
        assert all(title.startswith("Payment from") for title in staff_titles)

    def test_staff_payment_does_not_notify_staff(self, db_session, student, admin_user):
        notifications = NotificationService(db_session, hub=NotificationHub())
        service = BillingService(db_session, notifications=notifications)
        bill = service.create_bill(student.id, "2024-05", 1000)

        service.pay(bill.id, 1000, acting_user=admin_user)

        assert db_session.scalar(
            select(func.count(Notification.id)).where(Notification.user_id == admin_user.id)
        ) == 0
        student_titles = db_session.scalars(
            select(Notification.title).where(Notification.user_id == student.user_id)
        ).all()
        assert sorted(student_titles) == ["New bill", "Payment received"]
