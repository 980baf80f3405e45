"""Tests for tolerant invoice date parsing."""

from datetime import date, datetime
from unittest.mock import MagicMock

from commission_desk.domain.services.dates import (
    invoice_bucket_date,
    month_key,
    parse_invoice_date,
)


def test_parse_invoice_date_accepts_common_formats() -> None:
    assert parse_invoice_date(date(2024, 3, 1)) == date(2024, 3, 1)
    assert parse_invoice_date(datetime(2024, 3, 1, 23, 59)) == date(2024, 3, 1)
    assert parse_invoice_date("2024-03-01") == date(2024, 3, 1)
    assert parse_invoice_date("2024-03-01T10:15:00Z") == date(2024, 3, 1)
    assert parse_invoice_date("01/03/2024") == date(2024, 3, 1)


def test_parse_invoice_date_falls_back_and_warns() -> None:
    """Garbage never raises: it becomes the fallback day."""
    logger = MagicMock()

    result = parse_invoice_date(
        "not a date",
        logger=logger,
        today=date(2024, 1, 2),
    )

    assert result == date(2024, 1, 2)
    logger.warning.assert_called_once()


def test_invoice_bucket_date_prefers_invoice_date(make_invoice) -> None:
    invoice = make_invoice(
        invoice_date=date(2024, 2, 28),
        created_at=datetime(2024, 3, 2, 8, 0),
    )

    assert invoice_bucket_date(invoice) == date(2024, 2, 28)


def test_month_key_is_zero_padded() -> None:
    assert month_key(date(2024, 3, 9)) == "2024-03"
