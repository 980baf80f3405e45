"""Tests for the init_db_cli adapter."""

from sqlalchemy import inspect

from commission_desk.adapters import init_db_cli
from commission_desk.infrastructure.db import get_engine


def test_main_creates_tables_and_prints_url(monkeypatch, capsys, file_settings):
    """The CLI should create every table and report the database URL."""
    monkeypatch.setattr(init_db_cli, "build_settings", lambda: file_settings)

    init_db_cli.main()

    tables = set(inspect(get_engine(file_settings)).get_table_names())
    assert {"invoices", "invoice_products", "clients", "products"} <= tables
    assert "Database ready: sqlite:///" in capsys.readouterr().out
