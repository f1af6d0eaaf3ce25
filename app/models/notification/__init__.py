"""Notification models package."""

from app.models.notification.notification import Notification

__all__ = ["Notification"]
