"""Use case for the rest percentage and NCF sequence settings."""

from decimal import Decimal

from commission_desk.application.ports.settings_repository import (
    SettingsRepositoryPort,
)
from commission_desk.domain.constants import (
    DEFAULT_REST_PERCENTAGE,
    LAST_NCF_NUMBER_KEY,
    REST_PERCENTAGE_KEY,
)
from commission_desk.domain.errors import ValidationError
from commission_desk.domain.services.ncf import (
    MAX_NCF_NUMBER,
    next_ncf_number,
    suggest_next_ncf,
)
from commission_desk.domain.services.validation import validate_percentage
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.utils.decimal_utils import coerce_decimal_or_zero


class ManageSettingsUseCase:
    """Read and update persisted settings."""

    def __init__(self, settings_repo: SettingsRepositoryPort, logger=None) -> None:
        """Initialize the use case.

        Args:
            settings_repo: Port providing key/value settings.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._settings_repo = settings_repo
        self._logger = logger or get_app_logger()

    def get_rest_percentage(self) -> Decimal:
        """Return the rest percentage, defaulting to 25 when unset."""
        raw = self._settings_repo.get(REST_PERCENTAGE_KEY)
        if raw is None:
            return DEFAULT_REST_PERCENTAGE
        value = coerce_decimal_or_zero(
            raw,
            logger=self._logger,
            field=REST_PERCENTAGE_KEY,
        )
        return value

    def update_rest_percentage(self, value) -> Decimal:
        """Persist a new rest percentage.

        Only future calculations use the new value; stored invoices keep the
        percentage they were saved with.

        Raises:
            ValidationError: If the value is outside 0 to 100.
        """
        percentage = validate_percentage(value)
        self._settings_repo.set(REST_PERCENTAGE_KEY, str(percentage))
        self._logger.info(f"Rest percentage updated to {percentage}")
        return percentage

    def get_last_ncf_number(self) -> int | None:
        """Return the last used NCF suffix, or None when never recorded."""
        raw = self._settings_repo.get(LAST_NCF_NUMBER_KEY)
        if raw is None or not str(raw).strip():
            return None
        try:
            return int(str(raw).strip())
        except ValueError:
            self._logger.warning(f"Malformed {LAST_NCF_NUMBER_KEY}={raw!r}")
            return None

    def update_last_ncf_number(self, number: int) -> int:
        """Persist the last used NCF suffix.

        Raises:
            ValidationError: If the number does not fit in four digits.
        """
        if number < 0 or number > MAX_NCF_NUMBER:
            raise ValidationError(f"NCF number out of range: {number}")
        self._settings_repo.set(LAST_NCF_NUMBER_KEY, str(number))
        self._logger.info(f"Last NCF number updated to {number}")
        return number

    def next_ncf_number(self) -> int | None:
        return next_ncf_number(self.get_last_ncf_number())

    def suggest_next_ncf(self) -> str | None:
        """Return the full NCF suggested for the next invoice."""
        return suggest_next_ncf(self.get_last_ncf_number())


__all__ = ["ManageSettingsUseCase"]
