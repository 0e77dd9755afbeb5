"""Database session management.

Provides engine and session factories keyed by database URL. SQLite
connections get foreign key enforcement switched on, which the
cascade and set-null rules in the schema depend on.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from contactdesk.config import DEFAULT_DATABASE_URL
from contactdesk.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """Turn on FK enforcement for every new SQLite connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Create a new SQLAlchemy engine.

    SQLite gets check_same_thread=False so FastAPI's threadpool can use
    the connection. In-memory SQLite additionally uses StaticPool so
    every session sees the same database.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        New engine instance (not cached).
    """
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_engine(database_url, echo=False, pool_pre_ping=True)

    if url.database and url.database != ":memory:":
        # Create parent directories for file databases
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def get_engine(database_url: str | None = None) -> Engine:
    """Get SQLAlchemy engine for the database.

    Engines are cached by URL so repeated calls share a pool.

    Args:
        database_url: SQLAlchemy URL. Defaults to the local SQLite file.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if database_url is None:
        database_url = DEFAULT_DATABASE_URL

    if database_url in _engine_cache:
        return _engine_cache[database_url]

    engine = create_db_engine(database_url)
    _engine_cache[database_url] = engine

    return engine


def get_session_factory(database_url: str | None = None) -> sessionmaker:
    """Get cached session factory for the database.

    Args:
        database_url: SQLAlchemy URL.

    Returns:
        Cached sessionmaker instance.
    """
    if database_url is None:
        database_url = DEFAULT_DATABASE_URL

    if database_url in _session_factory_cache:
        return _session_factory_cache[database_url]

    engine = get_engine(database_url)
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    _session_factory_cache[database_url] = factory

    return factory


def get_session(database_url: str | None = None) -> Session:
    """Get a database session.

    Note: Caller is responsible for closing the session. For automatic
    resource management, use session_scope() instead.
    """
    factory = get_session_factory(database_url)
    return factory()


@contextmanager
def session_scope(database_url: str | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Commits on successful exit, rolls back on exception, and always
    closes the session.

    Example:
        with session_scope() as session:
            session.add(record)
    """
    session = get_session(database_url)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: str | None = None) -> None:
    """Create all tables that don't exist yet."""
    engine = get_engine(database_url)
    Base.metadata.create_all(engine)
