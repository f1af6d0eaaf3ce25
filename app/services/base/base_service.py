"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session

from app.core.exceptions import BaseAppException
from app.core.logging import get_logger


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management utilities
    """

    def __init__(self, db_session: Session):
        """
        Initialize base service.

        Args:
            db_session: SQLAlchemy database session
        """
        self.db: Session = db_session
        self._logger = get_logger(self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.allocations.create(allocation)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            self._commit()
        except BaseAppException as e:
            self._rollback()
            self._logger.debug(f"Transaction aborted: {e.error_code.value}")
            raise
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _close_open_transaction(self) -> None:
        """
        Close the open transaction before waiting on an entity lock.

        An open transaction keeps a database lock on SQLite, so waiting on an
        entity lock with one held would stall the lock holder's commit.
        """
        if self.db.in_transaction():
            self._commit()

    def _commit(self) -> None:
        """Commit the current transaction with error handling."""
        try:
            self.db.commit()
            self._logger.debug("Transaction committed successfully")
        except Exception as e:
            self._logger.error(f"Commit failed: {e}", exc_info=True)
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
            self._logger.debug("Transaction rolled back")
        except Exception as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
