# backend/networth/database.py
"""
Database connection and session management.

The update store is a plain SQLAlchemy database. SQLite is the default
(single-user tracker); any SQLAlchemy URL works.

- In-memory SQLite uses StaticPool so every session shares one connection
- File-based SQLite enables foreign keys so cascading deletes are enforced
"""

import logging
from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .config import settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_store_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create SQLAlchemy engine for the given URL.

    Args:
        database_url: SQLAlchemy connection string
        echo: Echo SQL for debugging

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if database_url.lower().startswith("sqlite://"):
        in_memory = ":memory:" in database_url
        logger.info(f"Configuring SQLite database (in_memory={in_memory})")
        engine_kwargs = {"connect_args": {"check_same_thread": False}, "echo": echo}
        if in_memory:
            # StaticPool keeps a single connection so the in-memory database is shared
            engine_kwargs["poolclass"] = StaticPool
        engine = create_engine(database_url, **engine_kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    logger.info("Configuring database engine")
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


# Create engine and session factory
engine = create_store_engine(settings.database_url, echo=settings.debug)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Provide a database session that closes after use.

    Usage:
        with contextlib.closing(SessionLocal()) as db: ...
        # or
        db = next(get_db())
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
