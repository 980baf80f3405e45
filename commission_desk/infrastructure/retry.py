"""Retry policy for repository calls."""

import time
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from commission_desk.domain.errors import RepositoryError
from commission_desk.infrastructure.logging.logger import get_app_logger

T = TypeVar("T")


def run_with_retry(
    func: Callable[[], T],
    *,
    attempts: int = 3,
    backoff_base: float = 0.1,
    description: str = "database operation",
    logger=None,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Execute a database operation, retrying transient failures.

    ``OperationalError`` (locked database, dropped connection, timeout) is
    retried with exponential backoff. Other SQLAlchemy errors fail at once.

    Args:
        func: Operation to run.
        attempts: Maximum number of tries.
        backoff_base: Delay in seconds before the second try; doubles after.
        description: Label used in log messages.
        logger: Optional logger compatible with logging.Logger-like API.
        sleep: Delay function.

    Returns:
        The operation result.

    Raises:
        RepositoryError: If the operation keeps failing.
    """
    log = logger or get_app_logger()
    for attempt in range(attempts):
        try:
            return func()
        except OperationalError as exc:
            if attempt >= attempts - 1:
                log.error(
                    f"{description} failed after {attempts} attempts: {exc}"
                )
                raise RepositoryError(f"{description} failed") from exc
            delay = backoff_base * (2 ** attempt)
            log.warning(
                f"{description} failed (attempt {attempt + 1}/{attempts}); "
                f"retrying in {delay:.2f}s"
            )
            sleep(delay)
        except SQLAlchemyError as exc:
            log.error(f"{description} failed: {exc}")
            raise RepositoryError(f"{description} failed") from exc
    raise RepositoryError(f"{description} was not attempted")


__all__ = ["run_with_retry"]
