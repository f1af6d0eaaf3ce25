"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit. Transactions belong to the service layer so that
a multi-step operation (insert then recompute) commits or rolls back as one.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, lazyload

from app.core.exceptions import DatabaseError, DuplicateEntryError
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.

    Converts ``IntegrityError`` into ``DuplicateEntryError`` and any other
    ``SQLAlchemyError`` into ``DatabaseError``.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    @property
    def table_name(self) -> str:
        return self.model.__tablename__

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add entity to the session and flush it.

        Args:
            entity: Entity to create

        Returns:
            Created entity with its primary key populated

        Raises:
            DuplicateEntryError: If a unique constraint rejects the row
            DatabaseError: On any other storage failure
        """
        try:
            self.db.add(entity)
            self.db.flush()
            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.model.__name__} already exists",
                table=self.table_name,
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Create failed: {e}", operation="insert", table=self.table_name
            ) from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """Find entity by ID, or None."""
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Find by ID failed: {e}", operation="select", table=self.table_name
            ) from e

    def lock_by_id(self, id: str) -> Optional[ModelType]:
        """
        Load entity with a row lock held until the transaction ends.

        ``populate_existing`` refreshes an instance already in the identity
        map so the caller sees the committed state. Backends without row
        locks (SQLite) ignore ``FOR UPDATE``.
        """
        try:
            return self.db.execute(self.lock_statement(id)).scalars().first()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Lock failed: {e}", operation="select", table=self.table_name
            ) from e

    def lock_statement(self, id: str) -> Select:
        """
        Row-lock query for one entity.

        Eager joins are switched off and the lock names this table only.
        PostgreSQL refuses ``FOR UPDATE`` on the nullable side of an outer
        join, and related rows are not ours to lock.
        """
        return (
            select(self.model)
            .where(self.model.id == id)
            .options(lazyload("*"))
            .with_for_update(of=self.model)
            .execution_options(populate_existing=True)
        )

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any]) -> ModelType:
        """
        Apply field updates and flush.

        Unknown keys are ignored.
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        try:
            self.db.flush()
            return entity
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.model.__name__} conflicts with an existing record",
                table=self.table_name,
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Update failed: {e}", operation="update", table=self.table_name
            ) from e

    # ==================== Delete Operations ====================

    def delete(self, entity: ModelType) -> None:
        """Delete entity and flush."""
        try:
            self.db.delete(entity)
            self.db.flush()
            logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")
        except IntegrityError as e:
            raise DuplicateEntryError(
                f"{self.model.__name__} is still referenced",
                table=self.table_name,
            ) from e
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Delete failed: {e}", operation="delete", table=self.table_name
            ) from e

    def _execute(self, stmt) -> int:
        """Run a bulk statement; returns the affected row count."""
        try:
            return self.db.execute(stmt).rowcount
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Statement failed: {e}", operation="bulk", table=self.table_name
            ) from e

    # ==================== Helpers ====================

    def _scalars(self, stmt) -> List[Any]:
        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Query failed: {e}", operation="select", table=self.table_name
            ) from e

    def _rows(self, stmt) -> List[Any]:
        try:
            return list(self.db.execute(stmt).all())
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Query failed: {e}", operation="select", table=self.table_name
            ) from e

    def _scalar(self, stmt) -> Any:
        try:
            return self.db.execute(stmt).scalar()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Query failed: {e}", operation="select", table=self.table_name
            ) from e
