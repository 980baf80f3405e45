"""Use cases exporting and restoring JSON backups of the ledger.

A backup is a mapping ``{version, exportDate, data}`` where ``data`` holds the
rows of every table. Restoring clears invoices and their lines, upserts the
catalogs and settings, then reinserts the invoices. Invoice references to
clients or sellers that do not exist after the catalog restore are cleared.
"""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from commission_desk.application.ports.backup import (
    BackupRepositoryPort,
    Snapshot,
)
from commission_desk.domain.constants import (
    BACKUP_VERSION,
    FALLBACK_PRODUCT_COLOR,
)
from commission_desk.domain.errors import BackupFormatError
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.utils.decimal_utils import coerce_decimal_or_zero

BACKUP_TABLES = (
    "invoices",
    "invoice_products",
    "clients",
    "products",
    "sellers",
    "settings",
)


@dataclass(frozen=True)
class ImportBackupResult:
    """Summary of a restore.

    Attributes:
        written: Rows written per table.
        cleared_references: Invoice client/seller references set to null.
        dropped_lines: Invoice lines skipped because their invoice is missing.
        duplicate_ncfs: Invoices skipped because an earlier row used their NCF.
    """

    written: dict[str, int] = field(default_factory=dict)
    cleared_references: int = 0
    dropped_lines: int = 0
    duplicate_ncfs: int = 0


class ExportBackupUseCase:
    """Produce the backup payload of every table."""

    def __init__(
        self,
        backup_repo: BackupRepositoryPort,
        logger=None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._backup_repo = backup_repo
        self._logger = logger or get_app_logger()
        self._clock = clock or datetime.now

    def execute(self) -> dict[str, Any]:
        """Return the backup payload.

        Returns:
            dict[str, Any]: ``{version, exportDate, data}`` ready to serialize.
        """
        snapshot = self._backup_repo.fetch_snapshot()
        data = {table: list(snapshot.get(table, [])) for table in BACKUP_TABLES}
        self._logger.info(
            "Backup exported: "
            + ", ".join(f"{table}={len(rows)}" for table, rows in data.items())
        )
        return {
            "version": BACKUP_VERSION,
            "exportDate": self._clock().isoformat(),
            "data": data,
        }


class ImportBackupUseCase:
    """Restore a backup payload into the ledger."""

    def __init__(self, backup_repo: BackupRepositoryPort, logger=None) -> None:
        self._backup_repo = backup_repo
        self._logger = logger or get_app_logger()

    def execute(self, payload: Any) -> ImportBackupResult:
        """Validate, clean and restore a backup payload.

        Args:
            payload: Parsed backup JSON.

        Returns:
            ImportBackupResult: Counts of what was written and repaired.

        Raises:
            BackupFormatError: If the payload has no ``data`` mapping.
        """
        if not isinstance(payload, dict) or not isinstance(
            payload.get("data"),
            dict,
        ):
            raise BackupFormatError("Invalid backup: missing data property")
        data = payload["data"]
        version = payload.get("version")
        if version != BACKUP_VERSION:
            self._logger.warning(
                f"Restoring backup version {version!r}; expected "
                f"{BACKUP_VERSION}"
            )

        existing = self._backup_repo.fetch_snapshot()
        sellers = self._single_default(
            [self._clean_seller(row) for row in self._rows(data, "sellers")]
        )
        clients = [
            self._clean_client(row)
            for row in self._rows(data, "clients")
            if str(row.get("name") or "").strip()
        ]
        products = [
            self._clean_product(row) for row in self._rows(data, "products")
        ]
        settings = [
            {"key": row["key"], "value": str(row.get("value", ""))}
            for row in self._rows(data, "settings")
            if row.get("key")
        ]

        seller_ids = self._ids(existing.get("sellers", [])) | self._ids(sellers)
        client_ids = self._ids(existing.get("clients", [])) | self._ids(clients)
        invoices = []
        seen_ncfs: set[str] = set()
        cleared = 0
        duplicates = 0
        for row in self._rows(data, "invoices"):
            invoice = self._clean_invoice(row)
            if invoice["ncf"] in seen_ncfs:
                duplicates += 1
                continue
            seen_ncfs.add(invoice["ncf"])
            if invoice["client_id"] and invoice["client_id"] not in client_ids:
                invoice["client_id"] = None
                cleared += 1
            if invoice["seller_id"] and invoice["seller_id"] not in seller_ids:
                invoice["seller_id"] = None
                cleared += 1
            invoices.append(invoice)

        invoice_ids = self._ids(invoices)
        lines = []
        dropped = 0
        for row in self._rows(data, "invoice_products"):
            if row.get("invoice_id") not in invoice_ids:
                dropped += 1
                continue
            lines.append(self._clean_line(row))

        if cleared:
            self._logger.warning(
                f"Cleared {cleared} dangling client/seller references"
            )
        if duplicates:
            self._logger.warning(
                f"Skipped {duplicates} invoices with a repeated NCF"
            )
        if dropped:
            self._logger.warning(
                f"Dropped {dropped} invoice lines without an invoice"
            )

        snapshot: Snapshot = {
            "sellers": sellers,
            "clients": clients,
            "products": products,
            "settings": settings,
            "invoices": invoices,
            "invoice_products": lines,
        }
        written = self._backup_repo.replace_all(snapshot)
        self._logger.info(f"Backup restored: {written}")
        return ImportBackupResult(
            written=written,
            cleared_references=cleared,
            dropped_lines=dropped,
            duplicate_ncfs=duplicates,
        )

    @staticmethod
    def _rows(data: dict, table: str) -> list[dict[str, Any]]:
        rows = data.get(table) or []
        if not isinstance(rows, list):
            raise BackupFormatError(f"Invalid backup: {table} must be a list")
        return [row for row in rows if isinstance(row, dict)]

    @staticmethod
    def _ids(rows: list[dict[str, Any]]) -> set[str]:
        return {row["id"] for row in rows if row.get("id")}

    @staticmethod
    def _id(row: dict[str, Any]) -> str:
        return row.get("id") or str(uuid.uuid4())

    @staticmethod
    def _single_default(
        sellers: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        """Keep the default flag on the first flagged seller only."""
        default_seen = False
        for seller in sellers:
            if seller["is_default"]:
                seller["is_default"] = not default_seen
                default_seen = True
        return sellers

    def _number(self, row: dict[str, Any], field: str):
        return coerce_decimal_or_zero(
            row.get(field),
            logger=self._logger,
            field=field,
        )

    def _clean_seller(self, row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": self._id(row),
            "name": row.get("name") or "",
            "email": row.get("email") or None,
            "phone": row.get("phone") or None,
            "is_default": bool(row.get("is_default")),
            "created_at": row.get("created_at"),
        }

    def _clean_client(self, row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": self._id(row),
            "name": str(row["name"]).strip(),
            "phone": row.get("phone") or None,
            "email": row.get("email") or None,
            "address": row.get("address") or None,
            "notes": row.get("notes") or None,
            "created_at": row.get("created_at"),
        }

    def _clean_product(self, row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": self._id(row),
            "name": row.get("name") or "",
            "percentage": self._number(row, "percentage"),
            "color": row.get("color") or FALLBACK_PRODUCT_COLOR,
            "is_default": bool(row.get("is_default")),
            "created_at": row.get("created_at"),
        }

    def _clean_invoice(self, row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": self._id(row),
            "ncf": row.get("ncf") or "",
            "invoice_date": row.get("invoice_date") or row.get("created_at"),
            "total_amount": self._number(row, "total_amount"),
            "rest_amount": self._number(row, "rest_amount"),
            "rest_percentage": self._number(row, "rest_percentage"),
            "rest_commission": self._number(row, "rest_commission"),
            "total_commission": self._number(row, "total_commission"),
            "client_id": row.get("client_id") or None,
            "seller_id": row.get("seller_id") or None,
            "created_at": row.get("created_at"),
        }

    def _clean_line(self, row: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": self._id(row),
            "invoice_id": row["invoice_id"],
            "product_name": row.get("product_name") or "",
            "amount": self._number(row, "amount"),
            "percentage": self._number(row, "percentage"),
            "commission": self._number(row, "commission"),
        }


__all__ = [
    "BACKUP_TABLES",
    "ImportBackupResult",
    "ExportBackupUseCase",
    "ImportBackupUseCase",
]
