"""Use cases computing the monthly, annual and per-product views.

Every call fetches the invoice list and recomputes its aggregates; nothing
is cached between calls.
"""

from datetime import date
from decimal import Decimal

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
)
from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.domain.errors import BulkUpdateError
from commission_desk.domain.models import (
    AnnualStatistics,
    BulkUpdateResult,
    MonthlyProductBreakdown,
    MonthlyStatistics,
)
from commission_desk.domain.services.aggregation import (
    available_months,
    available_years,
    average_commission,
    build_daily_buckets,
    build_monthly_buckets,
    build_narrative,
    build_product_breakdown,
    filter_invoices_in_month,
    filter_invoices_in_year,
    find_record_invoice,
    percent_change,
    previous_month,
    rank_revenue_sources,
    rank_top_clients,
    select_best_bucket,
    total_commission,
    total_sales,
)
from commission_desk.domain.services.commission import (
    apply_product_percentage,
)
from commission_desk.domain.services.validation import (
    validate_name,
    validate_percentage,
)
from commission_desk.infrastructure.logging.logger import get_app_logger


class GetMonthlyStatisticsUseCase:
    """Compute the dashboard of one month."""

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryPort,
        client_repo: ClientRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            invoice_repo: Port providing stored invoices.
            client_repo: Port providing client names.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._invoice_repo = invoice_repo
        self._client_repo = client_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        year: int,
        month: int,
        seller_first_name: str = "ti",
    ) -> MonthlyStatistics:
        """Return the statistics of a month compared with the previous one.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.
            seller_first_name: Name used in the summary paragraph.

        Returns:
            MonthlyStatistics: Totals, daily buckets, rankings and summary.
        """
        invoices = self._invoice_repo.list_invoices()
        clients = self._client_repo.list_clients()

        current = filter_invoices_in_month(
            invoices,
            year,
            month,
            logger=self._logger,
        )
        prev_year, prev_month = previous_month(year, month)
        previous = filter_invoices_in_month(
            invoices,
            prev_year,
            prev_month,
            logger=self._logger,
        )

        sales = total_sales(current)
        commission = total_commission(current)
        average = average_commission(current)
        daily = build_daily_buckets(current, year, month, logger=self._logger)
        client_ranking = rank_top_clients(current, clients)
        top_client = client_ranking[0] if client_ranking else None
        revenue_sources = rank_revenue_sources(current)

        narrative = build_narrative(
            month=month,
            invoice_count=len(current),
            sales=sales,
            ranking=revenue_sources,
            top_client=top_client,
            average=average,
            seller_first_name=seller_first_name,
        )
        self._logger.info(
            f"Monthly statistics {year}-{month:02d}: "
            f"invoices={len(current)}, commission={commission}"
        )
        return MonthlyStatistics(
            year=year,
            month=month,
            total_sales=sales,
            total_commission=commission,
            invoice_count=len(current),
            average_commission=average,
            invoices=current,
            daily=daily,
            best_day=self._best_day(daily),
            top_client=top_client,
            client_ranking=client_ranking,
            revenue_sources=revenue_sources,
            record_invoice=find_record_invoice(current),
            commission_change=percent_change(
                commission,
                total_commission(previous),
            ),
            sales_change=percent_change(sales, total_sales(previous)),
            invoice_change=percent_change(len(current), len(previous)),
            narrative=narrative,
        )

    @staticmethod
    def _best_day(daily):
        best = select_best_bucket(daily)
        if best is None or best.commission <= 0:
            return None
        return best


class GetAnnualStatisticsUseCase:
    """Compute the month-by-month view of one year."""

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(self, year: int) -> AnnualStatistics:
        """Return twelve month buckets with growth and the best month."""
        invoices = filter_invoices_in_year(
            self._invoice_repo.list_invoices(),
            year,
            logger=self._logger,
        )
        monthly = build_monthly_buckets(invoices, year, logger=self._logger)
        best = select_best_bucket(monthly)
        if best is not None and best.commission <= 0:
            best = None
        self._logger.info(
            f"Annual statistics {year}: invoices={len(invoices)}"
        )
        return AnnualStatistics(
            year=year,
            total_sales=total_sales(invoices),
            total_commission=total_commission(invoices),
            invoice_count=len(invoices),
            monthly=monthly,
            best_month=best,
        )


class GetMonthlyBreakdownUseCase:
    """Group a month's sales per product."""

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryPort,
        client_repo: ClientRepositoryPort,
        logger=None,
    ) -> None:
        self._invoice_repo = invoice_repo
        self._client_repo = client_repo
        self._logger = logger or get_app_logger()

    def execute(self, year: int, month: int) -> MonthlyProductBreakdown:
        return build_product_breakdown(
            self._invoice_repo.list_invoices(),
            self._client_repo.list_clients(),
            year,
            month,
            logger=self._logger,
        )


class GetAvailablePeriodsUseCase:
    """List the months and years offered by the period selectors."""

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        today: date | None = None,
    ) -> tuple[list[tuple[int, int]], list[int]]:
        """Return ``(months, years)``, newest first."""
        reference = today or date.today()
        invoices = self._invoice_repo.list_invoices()
        return (
            available_months(invoices, reference, logger=self._logger),
            available_years(invoices, reference, logger=self._logger),
        )


class BulkUpdateProductPercentageUseCase:
    """Move one product to a new percentage across a month's invoices.

    Invoices are rewritten one at a time. A failure stops the run: invoices
    already rewritten keep their new values and the error reports how many
    were written. Running again with the same percentage rewrites the same
    values.
    """

    def __init__(self, invoice_repo: InvoiceRepositoryPort, logger=None) -> None:
        self._invoice_repo = invoice_repo
        self._logger = logger or get_app_logger()

    def execute(
        self,
        year: int,
        month: int,
        product_name: str,
        new_percentage,
    ) -> BulkUpdateResult:
        """Rewrite the product's lines in every invoice of the month.

        Args:
            year: Calendar year.
            month: Month number, 1 to 12.
            product_name: Name of the invoice line to rewrite.
            new_percentage: Percentage between 0 and 100.

        Returns:
            BulkUpdateResult: Number of invoices updated and skipped.

        Raises:
            ValidationError: If the name or percentage is rejected.
            BulkUpdateError: If a write fails part way through.
        """
        name = validate_name(product_name, field="product name")
        percentage = validate_percentage(new_percentage)
        invoices = filter_invoices_in_month(
            self._invoice_repo.list_invoices(),
            year,
            month,
            logger=self._logger,
        )

        updated_ids: list[str] = []
        skipped = 0
        for invoice in invoices:
            if invoice.find_line(name) is None:
                skipped += 1
                continue
            updated = apply_product_percentage(invoice, name, percentage)
            line = updated.find_line(name)
            try:
                self._invoice_repo.update_line_percentage(
                    invoice.id,
                    name,
                    line.percentage,
                    line.commission,
                    updated.total_commission,
                )
            except Exception as exc:
                self._logger.error(
                    f"Bulk update of {name} stopped at invoice {invoice.ncf} "
                    f"after {len(updated_ids)} updates: {exc}"
                )
                raise BulkUpdateError(
                    f"Bulk update of {name} failed at invoice {invoice.ncf}",
                    updated_count=len(updated_ids),
                ) from exc
            updated_ids.append(invoice.id)

        self._logger.info(
            f"Bulk update of {name} to {percentage}% for "
            f"{year}-{month:02d}: {len(updated_ids)} invoices"
        )
        return BulkUpdateResult(
            product_name=name,
            new_percentage=Decimal(percentage),
            updated_count=len(updated_ids),
            skipped_count=skipped,
            updated_invoice_ids=updated_ids,
        )


__all__ = [
    "GetMonthlyStatisticsUseCase",
    "GetAnnualStatisticsUseCase",
    "GetMonthlyBreakdownUseCase",
    "GetAvailablePeriodsUseCase",
    "BulkUpdateProductPercentageUseCase",
]
