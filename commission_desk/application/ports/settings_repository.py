"""Port for key/value application settings."""

from typing import Protocol


class SettingsRepositoryPort(Protocol):
    """Port exposing persisted settings."""

    def get(self, key: str) -> str | None:
        """Return the raw value of a setting, or None when unset."""

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite a setting."""

    def all(self) -> dict[str, str]:
        """Return every setting."""


__all__ = ["SettingsRepositoryPort"]
