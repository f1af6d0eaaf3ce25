"""
Tests for room allocation and status derivation.
"""
import random
from datetime import date
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select

from app.config.settings import CapacityPolicy
from app.core.exceptions import (
    AllocationNotFoundError,
    ConflictError,
    ErrorCode,
    RoomCapacityExceededError,
    RoomNotFoundError,
    RoomUnderMaintenanceError,
    StudentNotFoundError,
    ValidationError,
)
from app.models import Allocation, Notification
from app.models.base.enums import OccupancyStatus, RoomStatus, UserRole
from app.services.notification import NotificationHub, NotificationService
from app.services.room import OccupancyService
from app.services.room.occupancy_service import derive_occupancy, effective_status


def active_count(db, room_id):
    return db.scalar(
        select(func.count(Allocation.id)).where(
            Allocation.room_id == room_id, Allocation.is_active.is_(True)
        )
    )


class TestDerivation:
    @pytest.mark.parametrize(
        "count,capacity,expected",
        [
            (0, 2, OccupancyStatus.VACANT),
            (1, 2, OccupancyStatus.PARTIAL),
            (2, 2, OccupancyStatus.OCCUPIED),
            (3, 2, OccupancyStatus.OCCUPIED),
            (1, 1, OccupancyStatus.OCCUPIED),
        ],
    )
    def test_derive_occupancy(self, count, capacity, expected):
        assert derive_occupancy(count, capacity) == expected

    def test_maintenance_wins(self):
        assert effective_status(True, 0, 2) == RoomStatus.MAINTENANCE
        assert effective_status(False, 1, 2) == RoomStatus.PARTIAL


class TestAllocate:
    def test_capacity_two_walkthrough(self, db_session, room_factory, student_factory):
        room = room_factory(capacity=2)
        s1, s2, s3 = student_factory(), student_factory(), student_factory()
        service = OccupancyService(db_session)

        a1 = service.allocate(s1.id, room.id)
        assert room.status == RoomStatus.PARTIAL
        a2 = service.allocate(s2.id, room.id)
        assert room.status == RoomStatus.OCCUPIED

        with pytest.raises(RoomCapacityExceededError) as exc_info:
            service.allocate(s3.id, room.id)
        assert exc_info.value.status_code == 409
        assert exc_info.value.error_code == ErrorCode.INSUFFICIENT_CAPACITY
        assert active_count(db_session, room.id) == 2
        assert room.status == RoomStatus.OCCUPIED

        service.vacate(a1.id)
        assert room.status == RoomStatus.PARTIAL
        service.vacate(a2.id)
        assert room.status == RoomStatus.VACANT

    def test_start_date_defaults_to_today(self, db_session, room_factory, student):
        room = room_factory()
        allocation = OccupancyService(db_session).allocate(student.id, room.id)
        assert allocation.start_date == date.today()
        assert allocation.is_active is True
        assert allocation.over_capacity is False

    def test_reallocation_closes_previous(self, db_session, room_factory, student):
        room_a = room_factory(capacity=1)
        room_b = room_factory(capacity=2)
        service = OccupancyService(db_session)

        first = service.allocate(student.id, room_a.id, start_date=date(2024, 1, 1))
        assert room_a.status == RoomStatus.OCCUPIED

        second = service.allocate(student.id, room_b.id, start_date=date(2024, 3, 1))

        db_session.refresh(first)
        assert first.is_active is False
        assert first.end_date == date(2024, 3, 1)
        assert second.is_active is True
        assert room_a.status == RoomStatus.VACANT
        assert room_b.status == RoomStatus.PARTIAL

        active = db_session.scalars(
            select(Allocation).where(
                Allocation.student_id == student.id, Allocation.is_active.is_(True)
            )
        ).all()
        assert [a.id for a in active] == [second.id]

    def test_reallocating_into_own_full_room_is_allowed(self, db_session, room_factory, student):
        room = room_factory(capacity=1)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)

        service.allocate(student.id, room.id)

        assert active_count(db_session, room.id) == 1
        assert room.status == RoomStatus.OCCUPIED

    def test_flag_policy_accepts_and_marks(self, db_session, room_factory, student_factory):
        room = room_factory(capacity=1)
        service = OccupancyService(db_session, capacity_policy=CapacityPolicy.FLAG)

        first = service.allocate(student_factory().id, room.id)
        second = service.allocate(student_factory().id, room.id)

        assert first.over_capacity is False
        assert second.over_capacity is True
        assert active_count(db_session, room.id) == 2
        assert room.status == RoomStatus.OCCUPIED

    def test_room_under_maintenance_rejects(self, db_session, room_factory, student):
        room = room_factory()
        service = OccupancyService(db_session)
        service.update_room(room.id, {"status": "Maintenance"})

        with pytest.raises(RoomUnderMaintenanceError):
            service.allocate(student.id, room.id)
        assert active_count(db_session, room.id) == 0

    def test_unknown_ids(self, db_session, room_factory, student):
        room = room_factory()
        service = OccupancyService(db_session)
        with pytest.raises(StudentNotFoundError):
            service.allocate("missing", room.id)
        with pytest.raises(RoomNotFoundError):
            service.allocate(student.id, "missing")

    def test_student_is_notified(self, db_session, room_factory, student):
        room = room_factory()
        notifications = NotificationService(db_session, hub=NotificationHub())
        OccupancyService(db_session, notifications=notifications).allocate(student.id, room.id)

        rows = db_session.scalars(
            select(Notification).where(Notification.user_id == student.user_id)
        ).all()
        assert len(rows) == 1
        assert room.room_number in rows[0].body

    def test_notification_failure_does_not_undo_allocation(self, db_session, room_factory, student):
        room = room_factory()
        notifications = MagicMock()
        notifications.notify_user.side_effect = RuntimeError("push down")

        allocation = OccupancyService(db_session, notifications=notifications).allocate(
            student.id, room.id
        )

        assert allocation.is_active is True
        assert active_count(db_session, room.id) == 1


class TestVacate:
    def test_end_date_defaults_to_today(self, db_session, room_factory, student):
        room = room_factory()
        service = OccupancyService(db_session)
        allocation = service.allocate(student.id, room.id)

        vacated = service.vacate(allocation.id)

        assert vacated.is_active is False
        assert vacated.end_date == date.today()

    def test_vacating_twice_is_harmless(self, db_session, room_factory, student):
        room = room_factory()
        service = OccupancyService(db_session)
        allocation = service.allocate(student.id, room.id)
        service.vacate(allocation.id, end_date=date(2024, 6, 30))

        again = service.vacate(allocation.id, end_date=date(2024, 7, 31))

        assert again.end_date == date(2024, 6, 30)
        assert room.status == RoomStatus.VACANT

    def test_unknown_allocation(self, db_session):
        with pytest.raises(AllocationNotFoundError):
            OccupancyService(db_session).vacate("missing")


class TestRecompute:
    def test_idempotent(self, db_session, room_factory, student):
        room = room_factory(capacity=2)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)

        assert service.recompute(room.id) is False
        assert service.recompute(room.id) is False
        assert room.status == RoomStatus.PARTIAL

    def test_repairs_drifted_status(self, db_session, room_factory, student):
        room = room_factory(capacity=2)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)

        room.occupancy_status = OccupancyStatus.VACANT
        db_session.commit()

        assert service.recompute(room.id) is True
        assert room.status == RoomStatus.PARTIAL
        assert service.recompute(room.id) is False

    def test_missing_room_is_ignored(self, db_session):
        assert OccupancyService(db_session).recompute("missing") is False

    def test_maintenance_room_is_untouched(self, db_session, room_factory, student):
        room = room_factory(capacity=1)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)
        service.update_room(room.id, {"status": "Maintenance"})

        assert service.recompute(room.id) is False
        assert room.status == RoomStatus.MAINTENANCE

    def test_status_tracks_allocations_under_random_operations(
        self, db_session, room_factory, student_factory
    ):
        rng = random.Random(1234)
        rooms = [room_factory(capacity=1), room_factory(capacity=2), room_factory(capacity=3)]
        students = [student_factory() for _ in range(6)]
        service = OccupancyService(db_session)

        for _ in range(40):
            if rng.random() < 0.6:
                try:
                    service.allocate(rng.choice(students).id, rng.choice(rooms).id)
                except RoomCapacityExceededError:
                    pass
            else:
                active = db_session.scalars(
                    select(Allocation).where(Allocation.is_active.is_(True))
                ).all()
                if active:
                    service.vacate(rng.choice(active).id)

            for room in rooms:
                count = active_count(db_session, room.id)
                assert count <= room.capacity
                assert room.occupancy_status == derive_occupancy(count, room.capacity)

            for s in students:
                held = db_session.scalar(
                    select(func.count(Allocation.id)).where(
                        Allocation.student_id == s.id, Allocation.is_active.is_(True)
                    )
                )
                assert held <= 1


class TestUpdateRoom:
    def test_empty_update_rejected(self, db_session, room_factory):
        room = room_factory()
        with pytest.raises(ValidationError):
            OccupancyService(db_session).update_room(room.id, {})

    def test_invalid_status_rejected(self, db_session, room_factory):
        room = room_factory()
        with pytest.raises(ValidationError):
            OccupancyService(db_session).update_room(room.id, {"status": "Closed"})

    def test_unknown_room(self, db_session):
        with pytest.raises(RoomNotFoundError):
            OccupancyService(db_session).update_room("missing", {"capacity": 2})

    def test_duplicate_number_on_floor(self, db_session, room_factory):
        room_factory(room_number="201")
        room = room_factory(room_number="202")
        with pytest.raises(ConflictError) as exc_info:
            OccupancyService(db_session).update_room(room.id, {"room_number": "201"})
        assert exc_info.value.error_code == ErrorCode.DUPLICATE_ENTRY

    def test_capacity_change_rederives(self, db_session, room_factory, student):
        room = room_factory(capacity=2)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)
        assert room.status == RoomStatus.PARTIAL

        service.update_room(room.id, {"capacity": 1})

        assert room.status == RoomStatus.OCCUPIED

    def test_maintenance_override_and_clear(self, db_session, room_factory, student):
        room = room_factory(capacity=2)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)

        service.update_room(room.id, {"status": "Maintenance"})
        assert room.status == RoomStatus.MAINTENANCE
        assert room.is_under_maintenance is True

        # Any other explicit status only clears the override
        service.update_room(room.id, {"status": "Vacant"})
        assert room.is_under_maintenance is False
        assert room.status == RoomStatus.PARTIAL


class TestRoomsGrid:
    def test_occupants_visible_to_staff_only(self, db_session, room_factory, student):
        room = room_factory(capacity=2)
        service = OccupancyService(db_session)
        service.allocate(student.id, room.id)

        staff_view = {item.id: item for item in service.rooms_grid(UserRole.WARDEN)}
        student_view = {item.id: item for item in service.rooms_grid(UserRole.STUDENT)}

        assert staff_view[room.id].active_count == 1
        assert staff_view[room.id].status == RoomStatus.PARTIAL
        assert staff_view[room.id].occupants == [student.user.full_name]
        assert student_view[room.id].active_count == 1
        assert student_view[room.id].occupants is None
