"""Tests for the backup export and import use cases."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from commission_desk.application.use_cases.backup import (
    BACKUP_TABLES,
    ExportBackupUseCase,
    ImportBackupUseCase,
)
from commission_desk.domain.errors import BackupFormatError
from commission_desk.infrastructure.backup_repository import (
    SqlAlchemyBackupRepository,
)
from commission_desk.infrastructure.invoice_repository import (
    SqlAlchemyInvoiceRepository,
)


def test_export_backup_wraps_every_table() -> None:
    repo = MagicMock()
    repo.fetch_snapshot.return_value = {"clients": [{"id": "c1", "name": "Ana"}]}
    use_case = ExportBackupUseCase(
        repo,
        logger=MagicMock(),
        clock=lambda: datetime(2024, 3, 10, 8, 30),
    )

    payload = use_case.execute()

    assert payload["version"] == "1.2"
    assert payload["exportDate"] == "2024-03-10T08:30:00"
    assert set(payload["data"]) == set(BACKUP_TABLES)
    assert payload["data"]["clients"] == [{"id": "c1", "name": "Ana"}]
    assert payload["data"]["invoices"] == []


@pytest.mark.parametrize("payload", [None, [], {"version": "1.2"}, {"data": []}])
def test_import_backup_requires_data_mapping(payload) -> None:
    repo = MagicMock()

    with pytest.raises(BackupFormatError):
        ImportBackupUseCase(repo, logger=MagicMock()).execute(payload)
    repo.replace_all.assert_not_called()


def test_import_backup_repairs_references() -> None:
    """Dangling references are nulled and orphan lines dropped."""
    repo = MagicMock()
    repo.fetch_snapshot.return_value = {"sellers": [{"id": "s-old"}]}
    repo.replace_all.side_effect = lambda snapshot: {
        table: len(rows) for table, rows in snapshot.items()
    }
    payload = {
        "version": "1.2",
        "data": {
            "clients": [
                {"id": "c1", "name": " Ana "},
                {"id": "c2", "name": "  "},
            ],
            "sellers": [],
            "products": [{"id": "p1", "name": "Tintes", "percentage": 15}],
            "settings": [{"key": "rest_percentage", "value": 25}, {"value": 1}],
            "invoices": [
                {
                    "id": "i1",
                    "ncf": "B0100000001",
                    "total_amount": 100,
                    "client_id": "c2",
                    "seller_id": "s-old",
                },
                {"id": "i2", "ncf": "B0100000002", "seller_id": "s-gone"},
            ],
            "invoice_products": [
                {"id": "l1", "invoice_id": "i1", "product_name": "Tintes"},
                {"id": "l2", "invoice_id": "missing"},
            ],
        },
    }

    result = ImportBackupUseCase(repo, logger=MagicMock()).execute(payload)

    snapshot = repo.replace_all.call_args.args[0]
    assert [client["name"] for client in snapshot["clients"]] == ["Ana"]
    assert snapshot["products"][0]["color"] == "#6366f1"
    assert snapshot["settings"] == [{"key": "rest_percentage", "value": "25"}]
    first, second = snapshot["invoices"]
    assert first["client_id"] is None
    assert first["seller_id"] == "s-old"
    assert second["seller_id"] is None
    assert [line["id"] for line in snapshot["invoice_products"]] == ["l1"]
    assert result.cleared_references == 2
    assert result.dropped_lines == 1
    assert result.written["invoices"] == 2


def test_import_backup_rejects_non_list_table() -> None:
    repo = MagicMock()
    repo.fetch_snapshot.return_value = {}

    with pytest.raises(BackupFormatError):
        ImportBackupUseCase(repo, logger=MagicMock()).execute(
            {"data": {"clients": {"id": "c1"}}}
        )


def _recording_repo() -> MagicMock:
    repo = MagicMock()
    repo.fetch_snapshot.return_value = {}
    repo.replace_all.side_effect = lambda snapshot: {
        table: len(rows) for table, rows in snapshot.items()
    }
    return repo


def test_import_backup_keeps_a_single_default_seller() -> None:
    repo = _recording_repo()
    payload = {
        "data": {
            "sellers": [
                {"id": "s1", "name": "Ana", "is_default": True},
                {"id": "s2", "name": "Luis", "is_default": True},
                {"id": "s3", "name": "Eva"},
            ]
        }
    }

    ImportBackupUseCase(repo, logger=MagicMock()).execute(payload)

    sellers = repo.replace_all.call_args.args[0]["sellers"]
    assert [seller["is_default"] for seller in sellers] == [True, False, False]


def test_import_backup_zeroes_malformed_numbers() -> None:
    repo = _recording_repo()
    logger = MagicMock()
    payload = {
        "data": {
            "products": [{"id": "p1", "name": "Tintes", "percentage": "n/a"}],
            "invoices": [
                {
                    "id": "i1",
                    "ncf": "B0100000001",
                    "total_amount": "abc",
                    "total_commission": "12.50",
                }
            ],
            "invoice_products": [
                {"id": "l1", "invoice_id": "i1", "amount": "NaN"}
            ],
        }
    }

    ImportBackupUseCase(repo, logger=logger).execute(payload)

    snapshot = repo.replace_all.call_args.args[0]
    assert snapshot["products"][0]["percentage"] == Decimal("0")
    [invoice] = snapshot["invoices"]
    assert invoice["total_amount"] == Decimal("0")
    assert invoice["total_commission"] == Decimal("12.50")
    assert snapshot["invoice_products"][0]["amount"] == Decimal("0")
    warnings = [call.args[0] for call in logger.warning.call_args_list]
    assert any("total_amount='abc'" in message for message in warnings)


def test_import_backup_skips_repeated_ncfs() -> None:
    repo = _recording_repo()
    payload = {
        "data": {
            "invoices": [
                {"id": "i1", "ncf": "B0100000007"},
                {"id": "i2", "ncf": "B0100000007"},
            ],
            "invoice_products": [
                {"id": "l1", "invoice_id": "i1"},
                {"id": "l2", "invoice_id": "i2"},
            ],
        }
    }

    result = ImportBackupUseCase(repo, logger=MagicMock()).execute(payload)

    snapshot = repo.replace_all.call_args.args[0]
    assert [invoice["id"] for invoice in snapshot["invoices"]] == ["i1"]
    assert [line["id"] for line in snapshot["invoice_products"]] == ["l1"]
    assert result.duplicate_ncfs == 1
    assert result.dropped_lines == 1


def test_import_backup_with_bad_amount_restores_into_sqlite(
    db_port,
    logger,
) -> None:
    """A malformed amount is stored as zero instead of aborting the restore."""
    use_case = ImportBackupUseCase(
        SqlAlchemyBackupRepository(db_port, logger=logger),
        logger=logger,
    )

    result = use_case.execute(
        {
            "data": {
                "invoices": [
                    {
                        "id": "i1",
                        "ncf": "B0100000001",
                        "invoice_date": "2024-03-10",
                        "total_amount": "abc",
                        "rest_amount": "1000",
                    }
                ]
            }
        }
    )

    assert result.written["invoices"] == 1
    [invoice] = SqlAlchemyInvoiceRepository(
        db_port,
        logger=logger,
    ).list_invoices()
    assert invoice.total_amount == Decimal("0")
    assert invoice.rest_amount == Decimal("1000")
