"""JSON (de)serialization of backup payloads."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from commission_desk.domain.errors import BackupFormatError


def _default(value: Any):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Unsupported value in backup: {type(value).__name__}")


def dumps_backup(payload: dict[str, Any]) -> str:
    """Return the backup payload as indented JSON text."""
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_default)


def loads_backup(content: str | bytes) -> dict[str, Any]:
    """Parse backup JSON text.

    Raises:
        BackupFormatError: If the content is not a JSON object.
    """
    try:
        payload = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BackupFormatError("The file is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise BackupFormatError("The backup must be a JSON object")
    return payload


def backup_filename(today: date) -> str:
    """Return the default file name of a backup taken on ``today``."""
    return f"backup_comisiones_{today.isoformat()}.json"


def write_backup(payload: dict[str, Any], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_backup(payload), encoding="utf-8")
    return path


def read_backup(path: Path) -> dict[str, Any]:
    return loads_backup(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "dumps_backup",
    "loads_backup",
    "backup_filename",
    "write_backup",
    "read_backup",
]
