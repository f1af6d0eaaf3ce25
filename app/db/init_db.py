# app/db/init_db.py
"""Database initialization utilities."""
from sqlalchemy import inspect

from app.core.logging import get_logger
from app.db.base import Base
from app.db.session import engine

logger = get_logger(__name__)


def init_db() -> None:
    """
    Initialize the database by creating all missing tables.

    Note: This is suitable for development/testing only.
    """
    try:
        existing_tables = set(inspect(engine).get_table_names())
        Base.metadata.create_all(bind=engine)
        created = set(Base.metadata.tables) - existing_tables
        logger.info(
            "Database initialized",
            extra={"created_tables": sorted(created), "existing_tables": len(existing_tables)}
        )
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise

