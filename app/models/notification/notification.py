# app/models/notification/notification.py
"""
Core notification model.

In-app notification persisted for a user before it is pushed to any open
connection, so clients that were offline can still list it.
"""

from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import BaseModel
from app.models.base.mixins import CreatedAtMixin


class Notification(BaseModel, CreatedAtMixin):
    """In-app notification addressed to a single user."""

    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    link: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_read: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    __table_args__ = (
        Index("ix_notifications_user_read", "user_id", "is_read"),
    )
