"""
Occupancy engine.

Keeps each room's stored occupancy status equal to the status derived from
its active allocations:

* Vacant when no allocation is active
* Partial when some but not all beds are taken
* Occupied when the active count reaches capacity

The maintenance override suspends derivation until it is cleared. Writes
to one room are serialised by a per-room process lock plus a row lock.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.config.settings import CapacityPolicy, settings
from app.core.exceptions import (
    AllocationNotFoundError,
    ConflictError,
    ErrorCode,
    ResourceNotFoundError,
    RoomCapacityExceededError,
    RoomNotFoundError,
    RoomUnderMaintenanceError,
    StudentNotFoundError,
    ValidationError,
)
from app.core.locks import EntityLockRegistry, entity_locks
from app.models.base.enums import OccupancyStatus, RoomStatus, UserRole
from app.models.room import Allocation, Room
from app.repositories.room import AllocationRepository, FloorRepository, RoomRepository
from app.repositories.student import StudentRepository
from app.schemas.room import RoomGridItem
from app.services.base import BaseService
from app.services.notification import NotificationService

ROOM_LOCK = "room"
STUDENT_LOCK = "student"

UPDATABLE_ROOM_FIELDS = ("room_number", "capacity", "status", "floor_id")


def derive_occupancy(active_count: int, capacity: int) -> OccupancyStatus:
    """Status implied by an active allocation count."""
    if active_count <= 0:
        return OccupancyStatus.VACANT
    if active_count >= capacity:
        return OccupancyStatus.OCCUPIED
    return OccupancyStatus.PARTIAL


def effective_status(is_under_maintenance: bool, active_count: int, capacity: int) -> RoomStatus:
    if is_under_maintenance:
        return RoomStatus.MAINTENANCE
    return RoomStatus(derive_occupancy(active_count, capacity).value)


class OccupancyService(BaseService):
    """Room allocation, vacate and status derivation."""

    def __init__(
        self,
        db_session: Session,
        notifications: Optional[NotificationService] = None,
        capacity_policy: Optional[CapacityPolicy] = None,
        locks: Optional[EntityLockRegistry] = None,
    ):
        super().__init__(db_session)
        self.rooms = RoomRepository(db_session)
        self.floors = FloorRepository(db_session)
        self.allocations = AllocationRepository(db_session)
        self.students = StudentRepository(db_session)
        self.notifications = notifications
        self.capacity_policy = CapacityPolicy(
            capacity_policy or settings.ALLOCATION_CAPACITY_POLICY
        )
        self.locks = locks or entity_locks

    # ------------------------------------------------------------------ #
    # Status derivation
    # ------------------------------------------------------------------ #
    def recompute(self, room_id: str) -> bool:
        """
        Re-derive and persist a room's status from its active allocations.

        A missing room or a room under maintenance is left untouched.

        Returns:
            True if the stored status changed
        """
        self._close_open_transaction()
        with self.locks.hold(ROOM_LOCK, room_id):
            with self.transaction():
                room = self.rooms.lock_by_id(room_id)
                if room is None:
                    return False
                return self._recompute(room)

    def _recompute(self, room: Room) -> bool:
        if room.is_under_maintenance:
            return False

        # Pending allocation changes must be visible to the count
        self.db.flush()
        active_count = self.allocations.count_active_for_room(room.id)
        derived = derive_occupancy(active_count, room.capacity)
        if room.occupancy_status == derived:
            return False

        previous = room.occupancy_status
        room.occupancy_status = derived
        self.db.flush()
        self._logger.info(
            "Room status changed",
            extra={
                "room_id": room.id,
                "from_status": previous.value,
                "to_status": derived.value,
                "active_count": active_count,
            },
        )
        return True

    # ------------------------------------------------------------------ #
    # Allocation lifecycle
    # ------------------------------------------------------------------ #
    def allocate(
        self,
        student_id: str,
        room_id: str,
        start_date: Optional[date] = None,
        acting_user_id: Optional[str] = None,
    ) -> Allocation:
        """
        Place a student in a room.

        Any active allocation the student already holds is closed on
        ``start_date`` and its room re-derived. The capacity check and the
        insert run under the room lock in one transaction.

        Raises:
            StudentNotFoundError / RoomNotFoundError: unknown ids
            RoomUnderMaintenanceError: target room is flagged for maintenance
            RoomCapacityExceededError: room full under the reject policy
        """
        start_date = start_date or date.today()

        self._close_open_transaction()
        with self.locks.hold(STUDENT_LOCK, student_id):
            # Rooms can only join a student's active set under this lock
            prior_room_ids = {
                a.room_id for a in self.allocations.find_active_for_student(student_id)
            }
            self._close_open_transaction()

            lock_keys = [(ROOM_LOCK, rid) for rid in prior_room_ids | {room_id}]
            with self.locks.hold_many(lock_keys):
                with self.transaction():
                    student = self.students.find_by_id(student_id)
                    if student is None:
                        raise StudentNotFoundError(student_id)

                    # Row locks in a fixed order as well
                    locked = {
                        rid: self.rooms.lock_by_id(rid)
                        for rid in sorted(prior_room_ids | {room_id})
                    }
                    room = locked[room_id]
                    if room is None:
                        raise RoomNotFoundError(room_id)
                    if room.is_under_maintenance:
                        raise RoomUnderMaintenanceError(room_id)

                    taken = self.allocations.count_active_for_room(
                        room_id, exclude_student_id=student_id
                    )
                    capacity = room.capacity
                    over_capacity = taken >= capacity
                    if over_capacity and self.capacity_policy == CapacityPolicy.REJECT:
                        raise RoomCapacityExceededError(room_id, capacity, taken)

                    prior = self.allocations.find_active_for_student(student_id)
                    for previous in prior:
                        previous.is_active = False
                        previous.end_date = start_date

                    allocation = self.allocations.create(
                        Allocation(
                            student_id=student_id,
                            room_id=room_id,
                            start_date=start_date,
                            is_active=True,
                        )
                    )

                    self._recompute(room)
                    for previous_room_id in {p.room_id for p in prior} - {room_id}:
                        previous_room = locked.get(previous_room_id)
                        if previous_room is not None:
                            self._recompute(previous_room)

                    allocation_id = allocation.id
                    room_number = room.room_number

        if over_capacity:
            allocation.over_capacity = True
            self._logger.warning(
                "Allocation accepted past room capacity",
                extra={"room_id": room_id, "capacity": capacity, "active_before": taken},
            )

        self._logger.info(
            "Student allocated",
            extra={
                "allocation_id": allocation_id,
                "student_id": student_id,
                "room_id": room_id,
                "released_allocations": len(prior),
                "acting_user_id": acting_user_id,
            },
        )

        self._notify_student(
            student,
            "Room allocated",
            f"You have been allocated room {room_number}",
            "room_allocated",
            {"room_number": room_number, "start_date": start_date.isoformat()},
        )
        return allocation

    def vacate(
        self,
        allocation_id: str,
        end_date: Optional[date] = None,
        acting_user_id: Optional[str] = None,
    ) -> Allocation:
        """
        Close an allocation and re-derive its room.

        Vacating an allocation that is already inactive is accepted and only
        re-runs the derivation.
        """
        allocation = self.allocations.find_by_id(allocation_id)
        if allocation is None:
            raise AllocationNotFoundError(allocation_id)
        room_id = allocation.room_id

        # An allocation never moves rooms, so the lock key read here stays valid
        self._close_open_transaction()
        with self.locks.hold(ROOM_LOCK, room_id):
            with self.transaction():
                room = self.rooms.lock_by_id(room_id)
                allocation = self.allocations.lock_by_id(allocation_id)
                was_active = allocation.is_active
                if was_active:
                    allocation.is_active = False
                    allocation.end_date = end_date or date.today()
                if room is not None:
                    self._recompute(room)

        self._logger.info(
            "Allocation vacated" if was_active else "Vacate on inactive allocation",
            extra={
                "allocation_id": allocation_id,
                "room_id": room_id,
                "acting_user_id": acting_user_id,
            },
        )
        return allocation

    # ------------------------------------------------------------------ #
    # Room edits
    # ------------------------------------------------------------------ #
    def update_room(self, room_id: str, fields: Dict[str, Any]) -> Room:
        """
        Partially update a room.

        ``status`` = Maintenance sets the override and skips derivation. Any
        other status clears the override and is replaced by the derived
        value. Without ``status`` the room is simply re-derived, so a
        capacity change takes effect immediately.
        """
        changes = {k: v for k, v in fields.items() if k in UPDATABLE_ROOM_FIELDS}
        if not changes:
            raise ValidationError("No fields to update")

        status = changes.pop("status", None)
        if status is not None:
            try:
                status = RoomStatus(status)
            except ValueError:
                raise ValidationError(
                    "Invalid room status",
                    field_errors={"status": [f"must be one of {[s.value for s in RoomStatus]}"]},
                )

        self._close_open_transaction()
        with self.locks.hold(ROOM_LOCK, room_id):
            with self.transaction():
                room = self.rooms.lock_by_id(room_id)
                if room is None:
                    raise RoomNotFoundError(room_id)

                if "floor_id" in changes and self.floors.find_by_id(changes["floor_id"]) is None:
                    raise ResourceNotFoundError("Floor", changes["floor_id"])

                if "room_number" in changes or "floor_id" in changes:
                    target_floor = changes.get("floor_id", room.floor_id)
                    target_number = changes.get("room_number", room.room_number)
                    if self.rooms.find_by_floor_and_number(
                        target_floor, target_number, exclude_room_id=room.id
                    ):
                        raise ConflictError(
                            "Room number already exists on this floor",
                            ErrorCode.DUPLICATE_ENTRY,
                            {"floor_id": target_floor, "room_number": target_number},
                        )

                self.rooms.update(room, changes)

                if status == RoomStatus.MAINTENANCE:
                    room.is_under_maintenance = True
                    self.db.flush()
                else:
                    if status is not None:
                        room.is_under_maintenance = False
                    self._recompute(room)

        self._logger.info(
            "Room updated",
            extra={"room_id": room_id, "fields": sorted(fields), "status": room.status.value},
        )
        return room

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    def rooms_grid(self, role: UserRole) -> List[RoomGridItem]:
        """
        All rooms with live counts and status computed at query time.

        Occupant names are included for Admin and Warden only.
        """
        show_occupants = role in (UserRole.ADMIN, UserRole.WARDEN)
        occupants = self.rooms.occupant_names() if show_occupants else {}

        grid = []
        for room, floor, block, active_count in self.rooms.grid_rows():
            active_count = int(active_count)
            grid.append(
                RoomGridItem(
                    id=room.id,
                    block_id=block.id,
                    block_name=block.name,
                    floor_id=floor.id,
                    floor_name=floor.name,
                    room_number=room.room_number,
                    capacity=room.capacity,
                    active_count=active_count,
                    status=effective_status(room.is_under_maintenance, active_count, room.capacity),
                    occupants=occupants.get(room.id, []) if show_occupants else None,
                )
            )
        return grid

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _notify_student(self, student, title: str, body: str, template: str, context: Dict[str, Any]) -> None:
        if self.notifications is None:
            return
        try:
            self.notifications.notify_user(student.user_id, title, body, "/rooms")
            self.notifications.email_user(student.user, template, context)
        except Exception as e:
            self._logger.warning(
                f"Notification failed after commit: {e}",
                exc_info=True,
                extra={"student_id": student.id},
            )
