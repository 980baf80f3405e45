"""Shared plumbing of the SQLAlchemy repositories."""

from collections.abc import Callable
from datetime import date, datetime
from decimal import Decimal
from typing import TypeVar

from commission_desk.application.ports.database import DatabaseEnginePort
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.infrastructure.retry import run_with_retry
from commission_desk.infrastructure.settings import DEFAULT_DB_RETRIES

T = TypeVar("T")


def to_db_number(value) -> str:
    """Bind Decimal values as text so SQLite drivers accept them."""
    if isinstance(value, Decimal):
        return str(value)
    return str(Decimal(str(value)))


def to_db_timestamp(value: datetime | date | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def parse_timestamp(value) -> datetime | None:
    """Read a stored timestamp, returning None when it cannot be parsed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


class SqlAlchemyRepository:
    """Base class running every call through the retry policy."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        logger=None,
        attempts: int = DEFAULT_DB_RETRIES,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            logger: Optional logger compatible with logging.Logger-like API.
            attempts: Tries per call before raising RepositoryError.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._attempts = attempts

    def _run(self, description: str, func: Callable[[], T]) -> T:
        return run_with_retry(
            func,
            attempts=self._attempts,
            description=description,
            logger=self._logger,
        )


__all__ = [
    "to_db_number",
    "to_db_timestamp",
    "parse_timestamp",
    "SqlAlchemyRepository",
]
