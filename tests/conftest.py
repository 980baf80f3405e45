"""Shared fixtures for the commission desk tests."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from commission_desk.domain.models import Invoice, InvoiceLine
from commission_desk.domain.services.commission import (
    compute_line,
    recompute_invoice,
)
from commission_desk.infrastructure import db as db_module
from commission_desk.infrastructure.db import _enable_sqlite_foreign_keys
from commission_desk.infrastructure.schema import create_schema, seed_defaults
from commission_desk.infrastructure.settings import AppSettings


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with the ledger schema."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    create_schema(engine)
    seed_defaults(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_port(sqlite_engine):
    port = MagicMock()
    port.get_engine.return_value = sqlite_engine
    return port


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def make_invoice():
    """Build invoices with consistent derived fields."""

    def _make(
        invoice_id: str = "inv-1",
        ncf: str = "B0100000001",
        invoice_date: date | None = date(2024, 3, 10),
        total: str = "1000",
        lines: list[tuple[str, str, str]] | None = None,
        rest_percentage: str = "25",
        client_id: str | None = None,
        seller_id: str | None = None,
        created_at: datetime | None = None,
    ) -> Invoice:
        invoice_lines: list[InvoiceLine] = [
            compute_line(name, Decimal(amount), Decimal(percentage))
            for name, amount, percentage in (lines or [])
        ]
        breakdown = recompute_invoice(
            Decimal(total),
            invoice_lines,
            Decimal(rest_percentage),
        )
        return Invoice(
            id=invoice_id,
            ncf=ncf,
            invoice_date=invoice_date,
            total_amount=Decimal(total),
            rest_amount=breakdown.rest_amount,
            rest_percentage=breakdown.rest_percentage,
            rest_commission=breakdown.rest_commission,
            total_commission=breakdown.total_commission,
            products=breakdown.invoice_lines(),
            client_id=client_id,
            seller_id=seller_id,
            created_at=created_at or datetime(2024, 3, 10, 12, 0),
        )

    return _make


@pytest.fixture
def file_settings(tmp_path, monkeypatch):
    """Settings pointing at a fresh SQLite file, with the engine cache reset."""
    monkeypatch.setattr(db_module, "_engine", None)
    settings = AppSettings(
        db_url=f"sqlite:///{(tmp_path / 'ledger.db').as_posix()}",
        db_timeout=1.0,
        db_retries=1,
        reports_dir=tmp_path / "reports",
    )
    yield settings
    db_module.dispose_engine()
