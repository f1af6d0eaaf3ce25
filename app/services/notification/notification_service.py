"""
Notification service: persists in-app notifications and pushes them to
open connections.

Rows are committed before anything is pushed, so a client that reconnects
can always list what it missed.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError
from app.models.base.enums import UserRole
from app.models.notification import Notification
from app.models.user import User
from app.repositories.notification import NotificationRepository
from app.repositories.user import UserRepository
from app.services.base import BaseService
from app.services.notification.email_provider import EmailProvider
from app.services.notification.hub import NotificationHub, notification_hub

DEFAULT_ROLES = (UserRole.ADMIN, UserRole.WARDEN)


class NotificationService(BaseService):
    """In-app, push and email notifications."""

    def __init__(
        self,
        db_session: Session,
        hub: Optional[NotificationHub] = None,
        email: Optional[EmailProvider] = None,
    ):
        super().__init__(db_session)
        self.repository = NotificationRepository(db_session)
        self.users = UserRepository(db_session)
        self.hub = hub or notification_hub
        self.email = email

    def notify_users(
        self,
        user_ids: Iterable[str],
        title: str,
        body: Optional[str] = None,
        link: Optional[str] = None,
    ) -> List[Notification]:
        """
        Persist one notification per user, then push it.

        Args:
            user_ids: Recipients; duplicates are ignored
            title: Short headline
            body: Optional detail text
            link: Optional client route the notification points at
        """
        recipients = list(dict.fromkeys(uid for uid in user_ids if uid))
        if not recipients:
            return []

        with self.transaction():
            created = [
                self.repository.create(
                    Notification(user_id=uid, title=title, body=body, link=link)
                )
                for uid in recipients
            ]

        self.hub.publish(
            recipients,
            {
                "type": "notification",
                "title": title,
                "body": body,
                "link": link,
                "ts": datetime.now(timezone.utc).isoformat(),
            },
        )
        self._logger.info(
            "Notifications created",
            extra={"recipient_count": len(recipients), "title": title},
        )
        return created

    def notify_user(
        self,
        user_id: str,
        title: str,
        body: Optional[str] = None,
        link: Optional[str] = None,
    ) -> List[Notification]:
        return self.notify_users([user_id], title, body, link)

    def notify_roles(
        self,
        title: str,
        body: Optional[str] = None,
        link: Optional[str] = None,
        roles: Iterable[UserRole] = DEFAULT_ROLES,
    ) -> List[Notification]:
        """Notify every active user holding one of ``roles`` (Admin and Warden by default)."""
        user_ids = self.users.find_active_ids_by_roles(roles)
        return self.notify_users(user_ids, title, body, link)

    def email_user(self, user: User, template_name: str, context: Dict[str, Any]) -> None:
        """Queue an email to a user when email delivery is configured."""
        if self.email is None or not user.email:
            return
        self.email.send(user.email, template_name, {"student_name": user.full_name, **context})

    def email_roles(
        self,
        template_name: str,
        context: Dict[str, Any],
        roles: Iterable[UserRole] = DEFAULT_ROLES,
    ) -> int:
        """
        Queue one email per active user holding one of ``roles``.

        Returns:
            Number of recipients addressed
        """
        if self.email is None:
            return 0
        recipients = [u for u in self.users.find_active_by_roles(roles) if u.email]
        for user in recipients:
            self.email.send(user.email, template_name, {"recipient_name": user.full_name, **context})
        return len(recipients)

    def list_for_user(self, user_id: str, limit: int = 100) -> List[Notification]:
        return self.repository.list_for_user(user_id, limit)

    def mark_read(self, notification_id: str, user_id: str) -> Notification:
        with self.transaction():
            notification = self.repository.find_for_user(notification_id, user_id)
            if notification is None:
                raise ResourceNotFoundError("Notification", notification_id)
            notification.is_read = True
        return notification

    def mark_all_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read."""
        with self.transaction():
            updated = self.repository.mark_all_read(user_id)
        self._logger.info("Notifications marked read", extra={"updated": updated})
        return updated

    def count_unread(self, user_id: str) -> int:
        return self.repository.count_unread(user_id)
