# --- File: app/schemas/common/response.py ---
"""
Standard API response wrappers.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from app.schemas.common.base import BaseSchema

__all__ = [
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
]


class MessageResponse(BaseSchema):
    """Plain acknowledgement."""

    success: bool = Field(default=True, description="Success flag")
    message: str = Field(..., description="Response message")


class ErrorBody(BaseSchema):
    """Error payload rendered by the exception handlers."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(..., description="Error timestamp")


class ErrorResponse(BaseSchema):
    """Standard error response."""

    error: ErrorBody
    request_id: Optional[str] = Field(default=None, description="Request correlation id")


class HealthResponse(BaseSchema):
    status: str
    version: str
    environment: str
    database: str
