"""Common schemas package."""

from app.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseResponseSchema,
    BaseSchema,
    BaseUpdateSchema,
)
from app.schemas.common.response import (
    ErrorBody,
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)

__all__ = [
    "BaseSchema",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "MessageResponse",
    "ErrorBody",
    "ErrorResponse",
    "HealthResponse",
]
