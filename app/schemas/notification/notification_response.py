# --- File: app/schemas/notification/notification_response.py ---
"""
Notification response schemas.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = ["NotificationResponse", "ReadAllResponse"]


class NotificationResponse(BaseResponseSchema):
    title: str
    body: Optional[str] = None
    link: Optional[str] = None
    is_read: bool
    created_at: datetime


class ReadAllResponse(BaseSchema):
    updated: int = Field(..., description="Notifications newly marked read")
