"""Port for reading and writing invoices."""

from decimal import Decimal
from typing import Protocol

from commission_desk.domain.models import Invoice


class InvoiceRepositoryPort(Protocol):
    """Port exposing persistence of invoices and their product lines."""

    def list_invoices(self) -> list[Invoice]:
        """Return every invoice with its lines, newest first."""

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        """Return one invoice, or None when it does not exist."""

    def add_invoice(self, invoice: Invoice) -> Invoice:
        """Insert an invoice and its lines."""

    def update_invoice(self, invoice: Invoice) -> Invoice:
        """Overwrite an invoice, replacing all of its lines."""

    def update_line_percentage(
        self,
        invoice_id: str,
        product_name: str,
        percentage: Decimal,
        commission: Decimal,
        total_commission: Decimal,
    ) -> None:
        """Rewrite one line's percentage and the invoice total commission."""

    def delete_invoice(self, invoice_id: str) -> None:
        """Delete an invoice and its lines."""

    def ncf_exists(self, ncf: str, exclude_id: str | None = None) -> bool:
        """Return whether another invoice already uses the NCF."""

    def delete_all(self) -> None:
        """Delete every invoice and invoice line."""


__all__ = ["InvoiceRepositoryPort"]
