"""Use case wiping invoices and clients from the ledger."""

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
)
from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.infrastructure.logging.logger import get_app_logger


class DeleteAllDataUseCase:
    """Delete every invoice, invoice line and client.

    Products, sellers and settings are kept.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryPort,
        client_repo: ClientRepositoryPort,
        logger=None,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._client_repo = client_repo
        self._logger = logger or get_app_logger()

    def execute(self) -> None:
        self._invoice_repo.delete_all()
        self._client_repo.delete_all()
        self._logger.warning("All invoices and clients deleted")


__all__ = ["DeleteAllDataUseCase"]
