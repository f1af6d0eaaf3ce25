# app/models/room/room.py
"""
Room models.

Blocks contain floors and floors contain rooms; the hierarchy carries no
behaviour. A room's status is stored as two separate facts:

* ``is_under_maintenance``: an operator override that suspends derived state
* ``occupancy_status``: the state derived from active allocations, written
  only by the occupancy engine
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import OccupancyStatus, RoomStatus
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.room.allocation import Allocation

__all__ = [
    "Block",
    "Floor",
    "Room",
]


class Block(BaseModel, TimestampMixin):
    """Hostel block (building)."""

    __tablename__ = "blocks"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
    )

    floors: Mapped[List["Floor"]] = relationship(
        "Floor",
        back_populates="block",
        lazy="select",
    )


class Floor(BaseModel, TimestampMixin):
    """Floor within a block."""

    __tablename__ = "floors"

    block_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("blocks.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)

    block: Mapped["Block"] = relationship(
        "Block",
        back_populates="floors",
        lazy="joined",
    )
    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="floor",
        lazy="select",
    )

    __table_args__ = (
        UniqueConstraint("block_id", "name", name="uq_floors_block_name"),
    )


class Room(BaseModel, TimestampMixin):
    """
    Physical room with a fixed bed capacity.
    """

    __tablename__ = "rooms"

    floor_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("floors.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )

    # Status
    occupancy_status: Mapped[OccupancyStatus] = mapped_column(
        Enum(
            OccupancyStatus,
            name="occupancy_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=OccupancyStatus.VACANT,
        index=True,
    )
    is_under_maintenance: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    floor: Mapped["Floor"] = relationship(
        "Floor",
        back_populates="rooms",
        lazy="joined",
    )
    allocations: Mapped[List["Allocation"]] = relationship(
        "Allocation",
        back_populates="room",
        lazy="select",
    )

    __table_args__ = (
        UniqueConstraint("floor_id", "room_number", name="uq_rooms_floor_number"),
        CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
    )

    @property
    def status(self) -> RoomStatus:
        """Effective status: the maintenance override wins over derived state."""
        if self.is_under_maintenance:
            return RoomStatus.MAINTENANCE
        return RoomStatus(self.occupancy_status.value)

    def __repr__(self) -> str:
        return f"<Room(id={self.id}, room_number={self.room_number}, status={self.status.value})>"
