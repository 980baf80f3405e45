"""Tolerant date parsing for invoice bucketing.

A missing or unparsable invoice date never aborts an aggregation pass: it is
replaced by the current day and reported as a warning.
"""

import logging
from datetime import date, datetime
from typing import Any

from commission_desk.domain.models import Invoice

_LOGGER = logging.getLogger(__name__)

_STRING_PARSE_PATTERNS = (
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%d/%m/%Y",
)


def _coerce_to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        try:
            return datetime.fromisoformat(text[:-1] + "+00:00")
        except ValueError:
            pass
    for pattern in _STRING_PARSE_PATTERNS:
        try:
            return datetime.strptime(text, pattern)
        except ValueError:
            continue
    return None


def parse_invoice_date(
    value: Any,
    logger=None,
    today: date | None = None,
) -> date:
    """Parse a date-like value, falling back to today.

    Args:
        value: ``date``, ``datetime``, ``YYYY-MM-DD`` string or ISO timestamp.
        logger: Optional logger used to report the fallback.
        today: Fallback date; defaults to ``date.today()``.

    Returns:
        date: Calendar date of the value, or the fallback date.
    """
    parsed = _coerce_to_datetime(value)
    if parsed is not None:
        return parsed.date()
    fallback = today or date.today()
    (logger or _LOGGER).warning(
        f"Unparsable invoice date {value!r}; using {fallback.isoformat()}"
    )
    return fallback


def invoice_bucket_date(
    invoice: Invoice,
    logger=None,
    today: date | None = None,
) -> date:
    """Return the date used to bucket an invoice.

    The invoice date wins; the creation timestamp is used when the invoice
    date is missing.
    """
    value = invoice.invoice_date or invoice.created_at
    return parse_invoice_date(value, logger=logger, today=today)


def month_key(value: date) -> str:
    """Return the ``YYYY-MM`` key of a date."""
    return f"{value.year}-{value.month:02d}"


__all__ = ["parse_invoice_date", "invoice_bucket_date", "month_key"]
