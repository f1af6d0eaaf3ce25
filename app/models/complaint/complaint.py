# app/models/complaint/complaint.py
"""
Complaint model.

Raised by a student, triaged by Admin or Warden, who set the status and
optionally assign a staff member.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel
from app.models.base.enums import ComplaintStatus
from app.models.base.mixins import TimestampMixin

if TYPE_CHECKING:
    from app.models.staff.staff import Staff
    from app.models.student.student import Student

__all__ = ["Complaint"]


class Complaint(BaseModel, TimestampMixin):
    """Student complaint with its handling state."""

    __tablename__ = "complaints"

    student_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Link to a photo hosted elsewhere",
    )
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(
            ComplaintStatus,
            name="complaint_status_enum",
            native_enum=False,
            length=20,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=ComplaintStatus.PENDING,
    )
    assigned_to_staff_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("staff.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    student: Mapped["Student"] = relationship("Student", lazy="select")
    assigned_staff: Mapped[Optional["Staff"]] = relationship("Staff", lazy="select")

    __table_args__ = (
        Index("ix_complaints_student_created", "student_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Complaint(id={self.id}, student_id={self.student_id}, "
            f"status={self.status.value})>"
        )
