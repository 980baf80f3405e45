"""Tests for CalculateCommissionUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from commission_desk.application.use_cases.calculate_commission import (
    CalculateCommissionUseCase,
)
from commission_desk.domain.models import Product


def _product_repo(products) -> MagicMock:
    repo = MagicMock()
    repo.list_products.return_value = products
    return repo


def test_execute_uses_catalog_and_stored_rest_percentage() -> None:
    """The stored rest percentage and catalog drive the breakdown."""
    products = _product_repo(
        [Product(id="p1", name="Tintes", percentage=Decimal("15"), color="#fff")]
    )
    settings = MagicMock()
    settings.get.return_value = "30"
    use_case = CalculateCommissionUseCase(products, settings, logger=MagicMock())

    breakdown = use_case.execute(Decimal("1000"), {"p1": Decimal("200")})

    assert breakdown.rest_percentage == Decimal("30")
    assert breakdown.total_commission == Decimal("270")
    settings.get.assert_called_once_with("rest_percentage")


def test_execute_defaults_rest_percentage_when_unset() -> None:
    settings = MagicMock()
    settings.get.return_value = None
    use_case = CalculateCommissionUseCase(
        _product_repo([]),
        settings,
        logger=MagicMock(),
    )

    breakdown = use_case.execute(Decimal("100"), {})

    assert breakdown.rest_percentage == Decimal("25")
    assert breakdown.total_commission == Decimal("25")
