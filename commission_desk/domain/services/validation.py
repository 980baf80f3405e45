"""Input validation applied before values reach the commission core."""

import re
from decimal import Decimal, InvalidOperation

from commission_desk.domain.constants import NCF_SUFFIX_LENGTH
from commission_desk.domain.errors import ValidationError
from commission_desk.utils.decimal_utils import coerce_decimal

_NON_DIGITS = re.compile(r"\D")


def validate_name(name: str | None, field: str = "name") -> str:
    """Return the stripped name or raise when it is blank."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty")
    return cleaned


def validate_percentage(value) -> Decimal:
    """Return the percentage as Decimal when it lies within 0 and 100."""
    try:
        percentage = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(f"Invalid percentage: {value!r}") from exc
    if not percentage.is_finite() or percentage < 0 or percentage > 100:
        raise ValidationError(
            f"Percentage must be between 0 and 100, got {value!r}"
        )
    return percentage


def validate_amount(value, field: str = "amount") -> Decimal:
    """Return a non-negative amount as Decimal."""
    try:
        amount = coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError(f"Invalid {field}: {value!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise ValidationError(f"{field} must be a non-negative number")
    return amount


def validate_ncf_suffix(suffix) -> str:
    """Return the NCF suffix when it is exactly four digits."""
    text = str(suffix).strip() if suffix is not None else ""
    if len(text) != NCF_SUFFIX_LENGTH or not text.isdigit():
        raise ValidationError(
            f"NCF suffix must be {NCF_SUFFIX_LENGTH} digits, got {suffix!r}"
        )
    return text


def parse_amount_input(text: str | None) -> Decimal:
    """Read a typed amount keeping digits only.

    ``"1,250"`` becomes ``1250`` and an empty entry becomes ``0``.
    """
    digits = _NON_DIGITS.sub("", text or "")
    if not digits:
        return Decimal("0")
    return Decimal(int(digits))


__all__ = [
    "validate_name",
    "validate_percentage",
    "validate_amount",
    "validate_ncf_suffix",
    "parse_amount_input",
]
