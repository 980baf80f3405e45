"""Use cases for saving, editing, listing and deleting invoices."""

import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime

from commission_desk.application.ports.catalog_repository import (
    ProductRepositoryPort,
)
from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.application.ports.settings_repository import (
    SettingsRepositoryPort,
)
from commission_desk.application.use_cases.manage_settings import (
    ManageSettingsUseCase,
)
from commission_desk.domain.errors import (
    DuplicateNcfError,
    NotFoundError,
    ValidationError,
)
from commission_desk.domain.models import CommissionBreakdown, Invoice
from commission_desk.domain.services.aggregation import (
    filter_invoices_in_month,
)
from commission_desk.domain.services.commission import (
    compute_breakdown,
    compute_line,
    recompute_invoice,
)
from commission_desk.domain.services.dates import parse_invoice_date
from commission_desk.domain.services.ncf import parse_ncf_suffix
from commission_desk.domain.services.validation import (
    validate_amount,
    validate_name,
    validate_percentage,
)
from commission_desk.infrastructure.logging.logger import get_app_logger


def _new_id() -> str:
    return str(uuid.uuid4())


def _build_invoice(
    invoice_id: str,
    ncf: str,
    invoice_date: date,
    total_amount,
    breakdown: CommissionBreakdown,
    client_id: str | None,
    seller_id: str | None,
    created_at: datetime | None,
) -> Invoice:
    return Invoice(
        id=invoice_id,
        ncf=ncf,
        invoice_date=invoice_date,
        total_amount=total_amount,
        rest_amount=breakdown.rest_amount,
        rest_percentage=breakdown.rest_percentage,
        rest_commission=breakdown.rest_commission,
        total_commission=breakdown.total_commission,
        products=breakdown.invoice_lines(),
        client_id=client_id or None,
        seller_id=seller_id or None,
        created_at=created_at,
    )


class SaveInvoiceUseCase:
    """Persist a calculator result as a new invoice.

    The breakdown is recomputed from the submitted amounts so the stored
    invoice never depends on values cached by the interface. Every active
    product is snapshotted as a line, including those sold for 0.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryPort,
        product_repo: ProductRepositoryPort,
        settings_repo: SettingsRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            invoice_repo: Port persisting invoices.
            product_repo: Port providing the active product catalog.
            settings_repo: Port providing the rest percentage and NCF counter.
            logger: Optional logger compatible with logging.Logger-like API.
            id_factory: Optional generator of invoice identifiers.
            clock: Optional source of the creation timestamp.
        """
        self._invoice_repo = invoice_repo
        self._product_repo = product_repo
        self._settings = ManageSettingsUseCase(settings_repo, logger=logger)
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or _new_id
        self._clock = clock or datetime.now

    def execute(
        self,
        ncf: str,
        invoice_date,
        total_invoice,
        product_amounts: Mapping[str, object],
        client_id: str | None = None,
        seller_id: str | None = None,
    ) -> Invoice:
        """Validate, compute and store an invoice.

        Args:
            ncf: Full fiscal document number.
            invoice_date: Invoice date as ``date`` or ``YYYY-MM-DD`` string.
            total_invoice: Invoice total.
            product_amounts: Amount per product id.
            client_id: Optional client reference.
            seller_id: Optional seller reference.

        Returns:
            Invoice: The stored invoice.

        Raises:
            ValidationError: If an input is rejected.
            DuplicateNcfError: If the NCF already exists.
        """
        ncf_value = validate_name(ncf, field="NCF")
        total = validate_amount(total_invoice, field="total")
        if total <= 0:
            raise ValidationError("total must be greater than zero")
        amounts = {
            product_id: validate_amount(amount, field="product amount")
            for product_id, amount in product_amounts.items()
        }
        if self._invoice_repo.ncf_exists(ncf_value):
            raise DuplicateNcfError(f"NCF {ncf_value} already exists")

        products = self._product_repo.list_products()
        breakdown = compute_breakdown(
            total,
            amounts,
            products,
            self._settings.get_rest_percentage(),
        )
        invoice = _build_invoice(
            self._id_factory(),
            ncf_value,
            parse_invoice_date(invoice_date, logger=self._logger),
            total,
            breakdown,
            client_id,
            seller_id,
            self._clock(),
        )
        saved = self._invoice_repo.add_invoice(invoice)
        self._logger.info(
            f"Invoice {saved.ncf} saved: total={saved.total_amount}, "
            f"commission={saved.total_commission}"
        )

        ncf_number = parse_ncf_suffix(saved.ncf)
        if ncf_number is not None:
            self._settings.update_last_ncf_number(ncf_number)
        return saved


class UpdateInvoiceUseCase:
    """Apply an explicit edit to a stored invoice.

    Every derived field is recomputed from the edited total, lines and rest
    percentage.
    """

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        invoice_id: str,
        ncf: str,
        invoice_date,
        total_amount,
        lines: Sequence[tuple[str, object, object]],
        rest_percentage,
        client_id: str | None = None,
        seller_id: str | None = None,
    ) -> Invoice:
        """Overwrite an invoice with edited values.

        Args:
            invoice_id: Identifier of the invoice to edit.
            ncf: Full fiscal document number.
            invoice_date: Invoice date.
            total_amount: Edited invoice total.
            lines: ``(name, amount, percentage)`` for each product line.
            rest_percentage: Edited rest percentage.
            client_id: Optional client reference.
            seller_id: Optional seller reference.

        Returns:
            Invoice: The updated invoice.

        Raises:
            NotFoundError: If the invoice does not exist.
            ValidationError: If an input is rejected.
            DuplicateNcfError: If another invoice already uses the NCF.
        """
        current = self._invoice_repo.get_invoice(invoice_id)
        if current is None:
            raise NotFoundError(f"Invoice {invoice_id} not found")

        ncf_value = validate_name(ncf, field="NCF")
        total = validate_amount(total_amount, field="total")
        edited_lines = [
            compute_line(
                validate_name(name, field="product name"),
                validate_amount(amount, field="product amount"),
                validate_percentage(percentage),
            )
            for name, amount, percentage in lines
        ]
        if self._invoice_repo.ncf_exists(ncf_value, exclude_id=invoice_id):
            raise DuplicateNcfError(f"NCF {ncf_value} already exists")

        breakdown = recompute_invoice(
            total,
            edited_lines,
            validate_percentage(rest_percentage),
        )
        invoice = _build_invoice(
            invoice_id,
            ncf_value,
            parse_invoice_date(invoice_date, logger=self._logger),
            total,
            breakdown,
            client_id,
            seller_id,
            current.created_at,
        )
        updated = self._invoice_repo.update_invoice(invoice)
        self._logger.info(
            f"Invoice {updated.ncf} updated: commission="
            f"{updated.total_commission}"
        )
        return updated


class DeleteInvoiceUseCase:
    """Delete an invoice and its lines."""

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(self, invoice_id: str) -> None:
        self._invoice_repo.delete_invoice(invoice_id)
        self._logger.info(f"Invoice {invoice_id} deleted")


class ListInvoicesUseCase:
    """Return stored invoices for the history view."""

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        year: int | None = None,
        month: int | None = None,
        search: str | None = None,
    ) -> list[Invoice]:
        """Return invoices, newest first.

        Args:
            year: Optional year filter, used together with ``month``.
            month: Optional month filter.
            search: Optional case-insensitive NCF fragment.

        Returns:
            list[Invoice]: Matching invoices.
        """
        invoices = self._invoice_repo.list_invoices()
        if year is not None and month is not None:
            invoices = filter_invoices_in_month(
                invoices,
                year,
                month,
                logger=self._logger,
            )
        needle = (search or "").strip().lower()
        if needle:
            invoices = [
                invoice for invoice in invoices if needle in invoice.ncf.lower()
            ]
        return invoices


__all__ = [
    "SaveInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "DeleteInvoiceUseCase",
    "ListInvoicesUseCase",
]
