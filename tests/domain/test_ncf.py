"""Tests for NCF helpers."""

import pytest

from commission_desk.domain.errors import ValidationError
from commission_desk.domain.services.ncf import (
    MAX_NCF_NUMBER,
    format_ncf,
    next_ncf_number,
    parse_ncf_suffix,
    suggest_next_ncf,
)


def test_format_ncf_pads_numbers_and_checks_strings() -> None:
    assert format_ncf(42) == "B0100000042"
    assert format_ncf("0007") == "B0100000007"
    with pytest.raises(ValidationError):
        format_ncf("42")
    with pytest.raises(ValidationError):
        format_ncf(MAX_NCF_NUMBER + 1)


def test_parse_ncf_suffix_reads_last_four_digits() -> None:
    assert parse_ncf_suffix("B0100000123") == 123
    assert parse_ncf_suffix("B01000001AB") is None
    assert parse_ncf_suffix("") is None
    assert parse_ncf_suffix(None) is None


def test_next_and_suggested_ncf() -> None:
    """The suggestion is the last stored number plus one."""
    assert next_ncf_number(None) is None
    assert next_ncf_number(41) == 42
    assert suggest_next_ncf(41) == "B0100000042"
    assert suggest_next_ncf(None) is None
    assert suggest_next_ncf(MAX_NCF_NUMBER) is None
