"""Database infrastructure for the commission ledger.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the ledger database. SQLite files get a busy timeout and
foreign-key enforcement; server databases get a bounded connection pool.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from commission_desk.application.ports.database import DatabaseEnginePort
from commission_desk.infrastructure.settings import AppSettings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _create_engine(db_url: str, timeout: float) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.
        timeout: Seconds to wait for a pooled connection or a SQLite lock.

    Returns:
        Engine: A SQLAlchemy engine with health checks enabled.
    """
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            db_url,
            pool_pre_ping=True,
            connect_args={"timeout": timeout, "check_same_thread": False},
            future=True,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_timeout=timeout,
        pool_pre_ping=True,
        future=True,
    )


_engine: Optional[Engine] = None


def get_engine(settings: AppSettings | None = None) -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        Engine: Lazily initialized engine connected to the ledger.
    """
    global _engine
    if _engine is None:
        resolved = settings or AppSettings.from_env()
        _engine = _create_engine(resolved.db_url, resolved.db_timeout)
    return _engine


def dispose_engine() -> None:
    """Dispose of the cached engine so the next call builds a new one."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by SQLAlchemy.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so repositories depend only on the protocol.
    """

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings

    def get_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger.
        """
        return get_engine(self._settings)


__all__ = [
    "get_engine",
    "dispose_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
