"""Helpers for consistent user-facing number and date formatting."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from commission_desk.domain.constants import MONTH_NAMES_ES
from commission_desk.utils.decimal_utils import coerce_decimal, quantize_money


def format_currency(value) -> str:
    """Format a money amount with thousands separators and two decimals."""
    return f"{quantize_money(value):,.2f}"


def format_number(value) -> str:
    """Format a number with thousands separators, dropping zero cents."""
    amount = quantize_money(value)
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    return f"{amount:,.2f}"


def format_percent(value, places: int = 1) -> str:
    """Format a percentage with a fixed number of decimals."""
    exponent = Decimal(1).scaleb(-places)
    rounded = coerce_decimal(value).quantize(exponent, rounding=ROUND_HALF_UP)
    return f"{rounded}%"


def round_whole(value) -> Decimal:
    """Round half up to a whole number."""
    return coerce_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


def month_name(month: int) -> str:
    """Return the Spanish month name for a 1-12 month number."""
    return MONTH_NAMES_ES[month - 1]


def month_label(year: int, month: int, capitalize: bool = True) -> str:
    """Return a label such as ``Marzo 2024``."""
    label = f"{month_name(month)} {year}"
    return label[:1].upper() + label[1:] if capitalize else label


def format_day_label(value: date) -> str:
    """Return a label such as ``5 de marzo``."""
    return f"{value.day} de {month_name(value.month)}"


__all__ = [
    "format_currency",
    "format_number",
    "format_percent",
    "round_whole",
    "month_name",
    "month_label",
    "format_day_label",
]
