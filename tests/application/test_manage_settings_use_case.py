"""Tests for ManageSettingsUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from commission_desk.application.use_cases.manage_settings import (
    ManageSettingsUseCase,
)
from commission_desk.domain.errors import ValidationError


def _use_case(values: dict) -> tuple[ManageSettingsUseCase, MagicMock]:
    repo = MagicMock()
    repo.get.side_effect = values.get
    return ManageSettingsUseCase(repo, logger=MagicMock()), repo


def test_rest_percentage_defaults_to_25() -> None:
    use_case, _repo = _use_case({})

    assert use_case.get_rest_percentage() == Decimal("25")


def test_rest_percentage_reads_stored_value() -> None:
    use_case, _repo = _use_case({"rest_percentage": "30.5"})

    assert use_case.get_rest_percentage() == Decimal("30.5")


def test_update_rest_percentage_validates_range() -> None:
    use_case, repo = _use_case({})

    with pytest.raises(ValidationError):
        use_case.update_rest_percentage("150")
    repo.set.assert_not_called()

    assert use_case.update_rest_percentage("20") == Decimal("20")
    repo.set.assert_called_once_with("rest_percentage", "20")


def test_last_ncf_number_handles_missing_and_malformed_values() -> None:
    use_case, _repo = _use_case({"last_ncf_number": "abc"})
    assert use_case.get_last_ncf_number() is None

    use_case, _repo = _use_case({})
    assert use_case.get_last_ncf_number() is None
    assert use_case.suggest_next_ncf() is None


def test_suggest_next_ncf_increments_last_number() -> None:
    use_case, _repo = _use_case({"last_ncf_number": "41"})

    assert use_case.next_ncf_number() == 42
    assert use_case.suggest_next_ncf() == "B0100000042"


def test_update_last_ncf_number_rejects_out_of_range() -> None:
    use_case, repo = _use_case({})

    with pytest.raises(ValidationError):
        use_case.update_last_ncf_number(10000)
    repo.set.assert_not_called()
