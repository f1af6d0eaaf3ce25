"""Database session management."""
import time
from typing import Any, Dict, Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.config.settings import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
    }
    if settings.is_sqlite():
        # The request thread pool shares connections across threads
        options["connect_args"] = {"check_same_thread": False, **settings.DB_CONNECT_ARGS}
    else:
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=3600,
            connect_args=settings.DB_CONNECT_ARGS,
        )
    return options


def configure_sqlite_transactions(sqlite_engine: Engine) -> None:
    """
    Let SQLAlchemy emit BEGIN itself on pysqlite connections.

    The driver otherwise defers BEGIN until the first write, which breaks
    SAVEPOINT handling used by per-item batch writes.

    Transactions start IMMEDIATE so the write lock is taken up front. Two
    deferred transactions that both read and then write on different rooms
    would otherwise fail with "database is locked" instead of queueing on
    the busy timeout.
    """

    @event.listens_for(sqlite_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


engine = create_engine(settings.get_database_url(), **_engine_options())
if settings.is_sqlite():
    configure_sqlite_transactions(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@event.listens_for(Engine, "before_cursor_execute")
def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault('query_start_time', []).append(time.time())


@event.listens_for(Engine, "after_cursor_execute")
def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    """Log slow queries (more than 0.5 seconds)"""
    total_time = time.time() - conn.info['query_start_time'].pop()
    if total_time > 0.5:
        logger.warning(
            f"Slow query detected ({total_time:.4f}s): {statement[:100]}..."
        )


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/items/")
        def read_items(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
