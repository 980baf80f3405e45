"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")
HUNDRED = Decimal("100")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL, JSON or adapters.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        InvalidOperation: If the value cannot be read as a number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, str) and not value.strip():
        return Decimal("0")
    return Decimal(str(value))


def coerce_decimal_or_zero(value, logger=None, field: str = "value") -> Decimal:
    """Normalize numeric values to Decimal, replacing malformed input with 0.

    Args:
        value: Raw numeric value.
        logger: Optional logger used to report malformed values.
        field: Field name used in the warning message.

    Returns:
        Decimal: Normalized value, or 0 when the input is not numeric.
    """
    try:
        result = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        if logger is not None:
            logger.warning(f"Malformed numeric {field}={value!r}; using 0")
        return Decimal("0")
    if not result.is_finite():
        if logger is not None:
            logger.warning(f"Non-finite numeric {field}={value!r}; using 0")
        return Decimal("0")
    return result


def quantize_money(value: Decimal) -> Decimal:
    """Round a money amount to cents for display."""
    return coerce_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = [
    "CENT",
    "HUNDRED",
    "coerce_decimal",
    "coerce_decimal_or_zero",
    "quantize_money",
]
