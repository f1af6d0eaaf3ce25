"""Notification schemas package."""

from app.schemas.notification.notification_response import NotificationResponse, ReadAllResponse

__all__ = ["NotificationResponse", "ReadAllResponse"]
