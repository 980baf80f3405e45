"""Port for whole-database snapshots used by backups."""

from typing import Any, Protocol

Snapshot = dict[str, list[dict[str, Any]]]


class BackupRepositoryPort(Protocol):
    """Port reading and replacing every table at once."""

    def fetch_snapshot(self) -> Snapshot:
        """Return the rows of every table keyed by table name."""

    def replace_all(self, snapshot: Snapshot) -> dict[str, int]:
        """Replace table contents and return the rows written per table."""


__all__ = ["Snapshot", "BackupRepositoryPort"]
