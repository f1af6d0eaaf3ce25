"""
SQLAlchemy model mixins for reusable functionality.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """
    Mixin for automatic timestamp tracking.

    Provides created_at and updated_at fields. Values are set client side
    so that records created within the same second still order correctly.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
        comment="Record creation timestamp (UTC)"
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        comment="Record last update timestamp (UTC)"
    )


class CreatedAtMixin:
    """
    Mixin for append-only records that are never updated.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        index=True,
        comment="Record creation timestamp (UTC)"
    )
