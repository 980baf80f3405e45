"""Fiscal document number (NCF) helpers.

An NCF is the fixed seven character prefix followed by a zero padded four
digit suffix, e.g. ``B0100000042``.
"""

from commission_desk.domain.constants import NCF_PREFIX, NCF_SUFFIX_LENGTH
from commission_desk.domain.errors import ValidationError
from commission_desk.domain.services.validation import validate_ncf_suffix

MAX_NCF_NUMBER = 10 ** NCF_SUFFIX_LENGTH - 1


def format_ncf(suffix: int | str, prefix: str = NCF_PREFIX) -> str:
    """Build a full NCF from a numeric suffix.

    Args:
        suffix: Integer, or a string of exactly four digits.
        prefix: Fixed prefix of the fiscal sequence.

    Returns:
        str: Prefix followed by the zero padded suffix.

    Raises:
        ValidationError: If the suffix does not fit in four digits.
    """
    if isinstance(suffix, int):
        if suffix < 0 or suffix > MAX_NCF_NUMBER:
            raise ValidationError(f"NCF number out of range: {suffix}")
        return f"{prefix}{suffix:0{NCF_SUFFIX_LENGTH}d}"
    return f"{prefix}{validate_ncf_suffix(suffix)}"


def parse_ncf_suffix(ncf: str | None) -> int | None:
    """Return the numeric suffix of an NCF, or None when it has none."""
    if not ncf:
        return None
    tail = ncf.strip()[-NCF_SUFFIX_LENGTH:]
    if len(tail) != NCF_SUFFIX_LENGTH or not tail.isdigit():
        return None
    return int(tail)


def next_ncf_number(last_number: int | None) -> int | None:
    """Return the suggested next suffix: the last one plus one."""
    if last_number is None:
        return None
    return last_number + 1


def suggest_next_ncf(
    last_number: int | None,
    prefix: str = NCF_PREFIX,
) -> str | None:
    """Return the suggested next full NCF, if the sequence allows one."""
    number = next_ncf_number(last_number)
    if number is None or number > MAX_NCF_NUMBER:
        return None
    return format_ncf(number, prefix=prefix)


__all__ = [
    "MAX_NCF_NUMBER",
    "format_ncf",
    "parse_ncf_suffix",
    "next_ncf_number",
    "suggest_next_ncf",
]
