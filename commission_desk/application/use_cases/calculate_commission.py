"""Use case computing the live commission breakdown of the calculator."""

from collections.abc import Mapping

from commission_desk.application.ports.catalog_repository import (
    ProductRepositoryPort,
)
from commission_desk.application.ports.settings_repository import (
    SettingsRepositoryPort,
)
from commission_desk.application.use_cases.manage_settings import (
    ManageSettingsUseCase,
)
from commission_desk.domain.models import CommissionBreakdown
from commission_desk.domain.services.commission import compute_breakdown
from commission_desk.infrastructure.logging.logger import get_app_logger


class CalculateCommissionUseCase:
    """Compute a commission breakdown against the current catalog."""

    def __init__(
        self,
        product_repo: ProductRepositoryPort,
        settings_repo: SettingsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            product_repo: Port providing the active product catalog.
            settings_repo: Port providing the rest percentage.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._product_repo = product_repo
        self._settings = ManageSettingsUseCase(settings_repo, logger=logger)
        self._logger = logger or get_app_logger()

    def execute(
        self,
        total_invoice,
        product_amounts: Mapping[str, object],
    ) -> CommissionBreakdown:
        """Return the breakdown for the entered amounts.

        Args:
            total_invoice: Invoice total typed by the user.
            product_amounts: Amount per product id.

        Returns:
            CommissionBreakdown: Lines, rest and totals.
        """
        products = self._product_repo.list_products()
        rest_percentage = self._settings.get_rest_percentage()
        breakdown = compute_breakdown(
            total_invoice,
            product_amounts,
            products,
            rest_percentage,
        )
        self._logger.debug(
            f"Commission computed: total={total_invoice}, "
            f"commission={breakdown.total_commission}"
        )
        return breakdown


__all__ = ["CalculateCommissionUseCase"]
