"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and an abstract model carrying the UUID
primary key shared by all models.
"""

from typing import TypeVar
from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

# Create declarative base
Base = declarative_base()

# Type variable for model classes
ModelType = TypeVar("ModelType", bound="BaseModel")


def generate_uuid() -> str:
    return str(uuid4())


class BaseModel(Base):
    """
    Abstract base model with common fields and methods.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        nullable=False,
        comment="Primary key (UUID)"
    )

    def __repr__(self) -> str:
        """String representation of model instance."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
