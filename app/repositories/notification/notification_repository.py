# app/repositories/notification/notification_repository.py
"""
Notification repository.
"""

from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from app.models.notification import Notification
from app.repositories.base.base_repository import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    """Repository for in-app notifications."""

    def __init__(self, db: Session):
        super().__init__(Notification, db)

    def list_for_user(self, user_id: str, limit: int = 100) -> List[Notification]:
        stmt = (
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
            .limit(limit)
        )
        return self._scalars(stmt)

    def find_for_user(self, notification_id: str, user_id: str) -> Optional[Notification]:
        stmt = select(Notification).where(
            Notification.id == notification_id,
            Notification.user_id == user_id,
        )
        rows = self._scalars(stmt)
        return rows[0] if rows else None

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read; returns the count."""
        stmt = (
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
        )
        return self._execute(stmt)

    def count_unread(self, user_id: str) -> int:
        stmt = select(func.count(Notification.id)).where(
            Notification.user_id == user_id, Notification.is_read.is_(False)
        )
        return int(self._scalar(stmt) or 0)

    def delete_for_user(self, user_id: str) -> int:
        return self._execute(delete(Notification).where(Notification.user_id == user_id))
