"""Port for rendering printable reports."""

from pathlib import Path
from typing import Protocol

from commission_desk.domain.models import (
    AnnualStatistics,
    Invoice,
    MonthlyProductBreakdown,
)


class ReportRendererPort(Protocol):
    """Port writing PDF reports to disk."""

    def render_invoice_report(
        self,
        title: str,
        subtitle: str,
        invoices: list[Invoice],
        client_names: dict[str, str],
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render a list of invoices with totals."""

    def render_annual_report(
        self,
        statistics: AnnualStatistics,
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render a month-by-month summary of a year."""

    def render_breakdown_report(
        self,
        breakdown: MonthlyProductBreakdown,
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render the per-product breakdown of a month."""


__all__ = ["ReportRendererPort"]
