"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path

import dotenv

from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.utils.utils import get_project_root

DEFAULT_DB_URL = "sqlite:///data/commissions.db"
DEFAULT_DB_TIMEOUT = 10.0
DEFAULT_DB_RETRIES = 3
DEFAULT_REPORTS_DIR = "reports"


@dataclass(frozen=True)
class AppSettings:
    """Runtime settings of the ledger.

    Attributes:
        db_url: SQLAlchemy URL of the ledger database.
        db_timeout: Seconds to wait for a connection or a database lock.
        db_retries: Attempts made for a repository call before failing.
        reports_dir: Directory receiving generated PDF reports.
    """

    db_url: str = DEFAULT_DB_URL
    db_timeout: float = DEFAULT_DB_TIMEOUT
    db_retries: int = DEFAULT_DB_RETRIES
    reports_dir: Path = Path(DEFAULT_REPORTS_DIR)

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables and the ``.env`` file.

        Returns:
            AppSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("COMMISSION_DB_URL", "").strip() or DEFAULT_DB_URL
        return cls(
            db_url=cls._resolve_sqlite_url(db_url),
            db_timeout=cls._read_number(
                "COMMISSION_DB_TIMEOUT",
                DEFAULT_DB_TIMEOUT,
                float,
                logger,
            ),
            db_retries=max(
                1,
                cls._read_number(
                    "COMMISSION_DB_RETRIES",
                    DEFAULT_DB_RETRIES,
                    int,
                    logger,
                ),
            ),
            reports_dir=cls._resolve_dir(
                os.getenv("COMMISSION_REPORTS_DIR", "").strip()
                or DEFAULT_REPORTS_DIR
            ),
        )

    @staticmethod
    def _read_number(name: str, default, cast, logger):
        """Read a numeric environment variable, keeping the default if invalid.

        Args:
            name: Environment variable name.
            default: Value used when the variable is unset or malformed.
            cast: Conversion applied to the raw value.
            logger: Logger used for warnings.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            return cast(raw.strip())
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default

    @staticmethod
    def _resolve_sqlite_url(db_url: str) -> str:
        """Anchor relative SQLite file paths to the project root."""
        prefix = "sqlite:///"
        if not db_url.startswith(prefix):
            return db_url
        raw_path = db_url[len(prefix):]
        if not raw_path or raw_path == ":memory:" or raw_path.startswith("/"):
            return db_url
        return f"{prefix}{(get_project_root() / raw_path).as_posix()}"

    @staticmethod
    def _resolve_dir(raw_dir: str) -> Path:
        path = Path(raw_dir).expanduser()
        if not path.is_absolute():
            path = get_project_root() / path
        return path


__all__ = ["AppSettings"]
