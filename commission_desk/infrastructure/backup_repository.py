"""SQLAlchemy repository reading and restoring whole-table snapshots."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import text

from commission_desk.application.ports.backup import (
    BackupRepositoryPort,
    Snapshot,
)
from commission_desk.infrastructure.sqlalchemy_base import (
    SqlAlchemyRepository,
    to_db_number,
)

TABLE_COLUMNS = {
    "sellers": ("id", "name", "email", "phone", "is_default", "created_at"),
    "clients": (
        "id",
        "name",
        "phone",
        "email",
        "address",
        "notes",
        "created_at",
    ),
    "products": (
        "id",
        "name",
        "percentage",
        "color",
        "is_default",
        "created_at",
    ),
    "settings": ("key", "value", "updated_at"),
    "invoices": (
        "id",
        "ncf",
        "invoice_date",
        "total_amount",
        "rest_amount",
        "rest_percentage",
        "rest_commission",
        "total_commission",
        "client_id",
        "seller_id",
        "created_at",
    ),
    "invoice_products": (
        "id",
        "invoice_id",
        "product_name",
        "amount",
        "percentage",
        "commission",
    ),
}

NUMERIC_COLUMNS = {
    "percentage",
    "total_amount",
    "rest_amount",
    "rest_percentage",
    "rest_commission",
    "total_commission",
    "amount",
    "commission",
}

# Parents before children so references resolve.
UPSERT_ORDER = ("sellers", "clients", "products", "settings")
INSERT_ORDER = ("invoices", "invoice_products")
CONFLICT_KEYS = {"settings": "key"}
CLEAR_DEFAULT_SELLERS_SQL = text("UPDATE sellers SET is_default = :flag")


def _select_sql(table: str):
    return text(f"SELECT {', '.join(TABLE_COLUMNS[table])} FROM {table}")


def _insert_sql(table: str):
    columns = TABLE_COLUMNS[table]
    placeholders = ", ".join(f":{column}" for column in columns)
    return text(
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"
    )


def _upsert_sql(table: str):
    columns = TABLE_COLUMNS[table]
    key = CONFLICT_KEYS.get(table, "id")
    placeholders = ", ".join(f":{column}" for column in columns)
    updates = ", ".join(
        f"{column} = excluded.{column}" for column in columns if column != key
    )
    return text(
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT ({key}) DO UPDATE SET {updates}"
    )


def _plain_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


class SqlAlchemyBackupRepository(SqlAlchemyRepository, BackupRepositoryPort):
    """Snapshot access used by JSON backups."""

    def fetch_snapshot(self) -> Snapshot:
        """Return every row of every table as plain JSON-ready values."""

        def _load() -> Snapshot:
            engine = self._db_port.get_engine()
            snapshot: Snapshot = {}
            with engine.connect() as conn:
                for table in TABLE_COLUMNS:
                    rows = conn.execute(_select_sql(table)).all()
                    snapshot[table] = [
                        {
                            key: _plain_value(value)
                            for key, value in row._mapping.items()
                        }
                        for row in rows
                    ]
            return snapshot

        return self._run("read snapshot", _load)

    def replace_all(self, snapshot: Snapshot) -> dict[str, int]:
        """Restore a snapshot in one transaction.

        Invoices and their lines are replaced; catalogs and settings are
        upserted so records absent from the snapshot are kept.
        A default seller in the snapshot replaces the local default.

        Returns:
            dict[str, int]: Rows written per table.
        """

        def _write() -> dict[str, int]:
            written: dict[str, int] = {}
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(text("DELETE FROM invoice_products"))
                conn.execute(text("DELETE FROM invoices"))
                if any(
                    row.get("is_default") for row in snapshot.get("sellers", [])
                ):
                    conn.execute(CLEAR_DEFAULT_SELLERS_SQL, {"flag": False})
                for table in UPSERT_ORDER:
                    written[table] = self._write_rows(
                        conn,
                        table,
                        _upsert_sql(table),
                        snapshot.get(table, []),
                    )
                for table in INSERT_ORDER:
                    written[table] = self._write_rows(
                        conn,
                        table,
                        _insert_sql(table),
                        snapshot.get(table, []),
                    )
            return written

        written = self._run("restore snapshot", _write)
        self._logger.info(f"Snapshot restored: {written}")
        return written

    @staticmethod
    def _write_rows(conn, table: str, statement, rows) -> int:
        payload = [
            {
                column: (
                    to_db_number(row.get(column) or 0)
                    if column in NUMERIC_COLUMNS
                    else row.get(column)
                )
                for column in TABLE_COLUMNS[table]
            }
            for row in rows
        ]
        if payload:
            conn.execute(statement, payload)
        return len(payload)


__all__ = ["TABLE_COLUMNS", "SqlAlchemyBackupRepository"]
