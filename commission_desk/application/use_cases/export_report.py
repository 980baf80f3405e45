"""Use case rendering PDF reports of invoices, years and product breakdowns."""

from datetime import date
from pathlib import Path

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
    SellerRepositoryPort,
)
from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.application.ports.reports import ReportRendererPort
from commission_desk.application.use_cases.manage_catalog import (
    ManageSellersUseCase,
)
from commission_desk.application.use_cases.statistics import (
    GetAnnualStatisticsUseCase,
    GetMonthlyBreakdownUseCase,
)
from commission_desk.domain.errors import ValidationError
from commission_desk.domain.services.aggregation import (
    filter_invoices_in_month,
    filter_invoices_in_range,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.utils.formatting import month_label


class ExportReportUseCase:
    """Write PDF reports through the configured renderer.

    Each method returns the path of the written file. When no output path is
    given, the file is named after the period inside ``reports_dir``.
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepositoryPort,
        client_repo: ClientRepositoryPort,
        seller_repo: SellerRepositoryPort,
        renderer: ReportRendererPort,
        reports_dir: Path | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            invoice_repo: Port providing stored invoices.
            client_repo: Port providing client names.
            seller_repo: Port providing the seller printed on reports.
            renderer: Port writing the PDF files.
            reports_dir: Directory used for default file names.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._invoice_repo = invoice_repo
        self._client_repo = client_repo
        self._seller_repo = seller_repo
        self._renderer = renderer
        self._reports_dir = Path(reports_dir or "reports")
        self._logger = logger or get_app_logger()

    def monthly(self, year: int, month: int, output: Path | None = None) -> Path:
        """Render the invoices of a month."""
        invoices = filter_invoices_in_month(
            self._invoice_repo.list_invoices(),
            year,
            month,
            logger=self._logger,
        )
        target = self._target(output, f"comisiones_{year}-{month:02d}.pdf")
        path = self._renderer.render_invoice_report(
            title="Reporte de Comisiones",
            subtitle=month_label(year, month),
            invoices=invoices,
            client_names=self._client_names(),
            seller_name=self._seller_name(),
            output=target,
        )
        self._logger.info(f"Monthly report written to {path}")
        return path

    def date_range(
        self,
        start: date,
        end: date,
        output: Path | None = None,
    ) -> Path:
        """Render the invoices dated between two days, inclusive.

        Raises:
            ValidationError: If ``start`` is after ``end``.
        """
        if start > end:
            raise ValidationError("start date must not be after end date")
        invoices = filter_invoices_in_range(
            self._invoice_repo.list_invoices(),
            start,
            end,
            logger=self._logger,
        )
        target = self._target(
            output,
            f"comisiones_{start.isoformat()}_{end.isoformat()}.pdf",
        )
        path = self._renderer.render_invoice_report(
            title="Reporte de Comisiones",
            subtitle=f"Del {start:%d/%m/%Y} al {end:%d/%m/%Y}",
            invoices=invoices,
            client_names=self._client_names(),
            seller_name=self._seller_name(),
            output=target,
        )
        self._logger.info(f"Range report written to {path}")
        return path

    def annual(self, year: int, output: Path | None = None) -> Path:
        """Render the month-by-month summary of a year."""
        statistics = GetAnnualStatisticsUseCase(
            self._invoice_repo,
            logger=self._logger,
        ).execute(year)
        target = self._target(output, f"resumen_anual_{year}.pdf")
        path = self._renderer.render_annual_report(
            statistics,
            self._seller_name(),
            target,
        )
        self._logger.info(f"Annual report written to {path}")
        return path

    def breakdown(
        self,
        year: int,
        month: int,
        output: Path | None = None,
    ) -> Path:
        """Render the per-product breakdown of a month."""
        breakdown = GetMonthlyBreakdownUseCase(
            self._invoice_repo,
            self._client_repo,
            logger=self._logger,
        ).execute(year, month)
        target = self._target(output, f"desglose_{year}-{month:02d}.pdf")
        path = self._renderer.render_breakdown_report(
            breakdown,
            self._seller_name(),
            target,
        )
        self._logger.info(f"Breakdown report written to {path}")
        return path

    def _target(self, output: Path | None, default_name: str) -> Path:
        if output is not None:
            return Path(output)
        return self._reports_dir / default_name

    def _client_names(self) -> dict[str, str]:
        return {
            client.id: client.name
            for client in self._client_repo.list_clients()
        }

    def _seller_name(self) -> str | None:
        seller = ManageSellersUseCase(
            self._seller_repo,
            logger=self._logger,
        ).default_seller()
        return seller.name if seller else None


__all__ = ["ExportReportUseCase"]
