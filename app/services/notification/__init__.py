"""
Notification fan-out: in-app rows, WebSocket pushes and email.
"""

from app.services.notification.email_provider import EmailProvider
from app.services.notification.hub import Channel, NotificationHub, notification_hub
from app.services.notification.notification_service import NotificationService

__all__ = [
    "Channel",
    "NotificationHub",
    "notification_hub",
    "EmailProvider",
    "NotificationService",
]
