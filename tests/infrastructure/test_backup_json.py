"""Tests for the backup JSON helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from commission_desk.domain.errors import BackupFormatError
from commission_desk.infrastructure.backup_json import (
    backup_filename,
    dumps_backup,
    loads_backup,
    read_backup,
    write_backup,
)


def test_dumps_backup_converts_decimals_and_dates() -> None:
    text = dumps_backup(
        {"data": {"value": Decimal("12.5"), "at": datetime(2024, 3, 10, 8)}}
    )

    assert '"value": "12.5"' in text
    assert '"at": "2024-03-10T08:00:00"' in text


def test_dumps_backup_keeps_every_decimal_digit() -> None:
    amount = Decimal("12345678901234567.891")

    payload = loads_backup(dumps_backup({"data": {"amount": amount}}))

    assert Decimal(payload["data"]["amount"]) == amount


@pytest.mark.parametrize("content", ["not json", "[1, 2]", b"\xff\xfe"])
def test_loads_backup_rejects_invalid_content(content) -> None:
    with pytest.raises(BackupFormatError):
        loads_backup(content)


def test_backup_filename_uses_date() -> None:
    assert backup_filename(date(2024, 3, 10)) == (
        "backup_comisiones_2024-03-10.json"
    )


def test_write_and_read_backup(tmp_path) -> None:
    payload = {"version": "1.2", "data": {"clients": [{"name": "José"}]}}

    path = write_backup(payload, tmp_path / "out" / "backup.json")

    assert read_backup(path) == payload
    assert "José" in path.read_text(encoding="utf-8")
