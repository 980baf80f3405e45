"""SQLAlchemy repository for key/value settings."""

from datetime import datetime

from sqlalchemy import text

from commission_desk.application.ports.settings_repository import (
    SettingsRepositoryPort,
)
from commission_desk.infrastructure.sqlalchemy_base import SqlAlchemyRepository


SELECT_SETTING_SQL = text("SELECT value FROM settings WHERE key = :key")
SELECT_SETTINGS_SQL = text("SELECT key, value FROM settings ORDER BY key")
UPSERT_SETTING_SQL = text(
    """
    INSERT INTO settings (key, value, updated_at)
    VALUES (:key, :value, :updated_at)
    ON CONFLICT (key) DO UPDATE
    SET value = excluded.value, updated_at = excluded.updated_at
    """
)


class SqlAlchemySettingsRepository(SqlAlchemyRepository, SettingsRepositoryPort):
    """Settings table accessed through SQLAlchemy."""

    def get(self, key: str) -> str | None:
        def _load() -> str | None:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                row = conn.execute(SELECT_SETTING_SQL, {"key": key}).first()
            return None if row is None else row.value

        return self._run(f"read setting {key}", _load)

    def set(self, key: str, value: str) -> None:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(
                    UPSERT_SETTING_SQL,
                    {
                        "key": key,
                        "value": str(value),
                        "updated_at": datetime.now().isoformat(),
                    },
                )

        self._run(f"write setting {key}", _write)

    def all(self) -> dict[str, str]:
        def _load() -> dict[str, str]:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                rows = conn.execute(SELECT_SETTINGS_SQL).all()
            return {row.key: row.value for row in rows}

        return self._run("read settings", _load)


__all__ = ["SqlAlchemySettingsRepository"]
