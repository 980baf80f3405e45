"""Table definitions of the ledger database."""

from datetime import datetime

from sqlalchemy import text
from sqlalchemy.engine import Engine

from commission_desk.domain.constants import (
    DEFAULT_REST_PERCENTAGE,
    REST_PERCENTAGE_KEY,
)

CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS sellers (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        email TEXT,
        phone TEXT,
        is_default BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS clients (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        phone TEXT,
        email TEXT,
        address TEXT,
        notes TEXT,
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS products (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        percentage NUMERIC NOT NULL,
        color TEXT NOT NULL,
        is_default BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoices (
        id TEXT PRIMARY KEY,
        ncf TEXT NOT NULL,
        invoice_date TEXT,
        total_amount NUMERIC NOT NULL,
        rest_amount NUMERIC NOT NULL,
        rest_percentage NUMERIC NOT NULL,
        rest_commission NUMERIC NOT NULL,
        total_commission NUMERIC NOT NULL,
        client_id TEXT REFERENCES clients (id) ON DELETE SET NULL,
        seller_id TEXT REFERENCES sellers (id) ON DELETE SET NULL,
        created_at TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS invoice_products (
        id TEXT PRIMARY KEY,
        invoice_id TEXT NOT NULL REFERENCES invoices (id) ON DELETE CASCADE,
        product_name TEXT NOT NULL,
        amount NUMERIC NOT NULL,
        percentage NUMERIC NOT NULL,
        commission NUMERIC NOT NULL
    )
    """,
    "DROP INDEX IF EXISTS ix_invoices_ncf",
    "CREATE UNIQUE INDEX IF NOT EXISTS ux_invoices_ncf ON invoices (ncf)",
    """
    CREATE INDEX IF NOT EXISTS ix_invoice_products_invoice
    ON invoice_products (invoice_id)
    """,
)

SEED_SETTING_SQL = text(
    """
    INSERT INTO settings (key, value, updated_at)
    VALUES (:key, :value, :updated_at)
    ON CONFLICT (key) DO NOTHING
    """
)


def create_schema(engine: Engine) -> None:
    """Create every ledger table that does not exist yet."""
    with engine.begin() as conn:
        for statement in CREATE_TABLES_SQL:
            conn.exec_driver_sql(statement)


def seed_defaults(engine: Engine) -> None:
    """Store the default rest percentage unless one is already set."""
    with engine.begin() as conn:
        conn.execute(
            SEED_SETTING_SQL,
            {
                "key": REST_PERCENTAGE_KEY,
                "value": str(DEFAULT_REST_PERCENTAGE),
                "updated_at": datetime.now().isoformat(),
            },
        )


__all__ = ["CREATE_TABLES_SQL", "create_schema", "seed_defaults"]
