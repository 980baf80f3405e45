"""PDF reports rendered with ReportLab."""

from datetime import date, datetime
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from commission_desk.application.ports.reports import ReportRendererPort
from commission_desk.domain.models import (
    AnnualStatistics,
    Invoice,
    MonthlyProductBreakdown,
    ProductBreakdown,
)
from commission_desk.domain.services.aggregation import (
    total_commission,
    total_sales,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.utils.formatting import (
    format_currency,
    format_percent,
    month_label,
    month_name,
)

HEADER_COLOR = colors.HexColor("#10b981")
TOTAL_COLOR = colors.HexColor("#ecfdf5")


def _table_style(with_total_row: bool = False) -> TableStyle:
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (-2, 1), (-1, -1), "RIGHT"),
    ]
    if with_total_row:
        commands.extend(
            [
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_COLOR),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
            ]
        )
    return TableStyle(commands)


class ReportLabReportRenderer(ReportRendererPort):
    """Render commission reports as A4 PDF documents."""

    def __init__(self, logger=None) -> None:
        self._logger = logger or get_app_logger()
        styles = getSampleStyleSheet()
        self._normal = styles["Normal"]
        self._title = ParagraphStyle(
            "ReportTitle",
            parent=styles["Title"],
            fontSize=16,
            spaceAfter=12,
        )
        self._heading = ParagraphStyle(
            "ReportHeading",
            parent=styles["Heading2"],
            fontSize=12,
            spaceAfter=6,
        )

    def render_invoice_report(
        self,
        title: str,
        subtitle: str,
        invoices: list[Invoice],
        client_names: dict[str, str],
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render a table of invoices followed by their totals.

        Args:
            title: Report title.
            subtitle: Period label.
            invoices: Invoices to list.
            client_names: Client name per client id.
            seller_name: Seller printed in the header, if any.
            output: Destination file.

        Returns:
            Path: The written file.
        """
        elements = self._header(title, subtitle, seller_name)
        summary = [
            ["Resumen", ""],
            ["Facturas", str(len(invoices))],
            ["Ventas totales", f"${format_currency(total_sales(invoices))}"],
            [
                "Comisión total",
                f"${format_currency(total_commission(invoices))}",
            ],
        ]
        summary_table = Table(summary, colWidths=[130, 150])
        summary_table.setStyle(_table_style())
        elements.extend([summary_table, Spacer(1, 8 * mm)])

        if invoices:
            elements.append(Paragraph("Facturas", self._heading))
            rows = [["Fecha", "NCF", "Cliente", "Total", "Comisión"]]
            for invoice in sorted(
                invoices,
                key=lambda item: item.invoice_date or date.min,
            ):
                rows.append(
                    [
                        self._date(invoice),
                        invoice.ncf,
                        self._truncate(
                            client_names.get(invoice.client_id or "", "-"),
                            30,
                        ),
                        f"${format_currency(invoice.total_amount)}",
                        f"${format_currency(invoice.total_commission)}",
                    ]
                )
            rows.append(
                [
                    "Total",
                    "",
                    "",
                    f"${format_currency(total_sales(invoices))}",
                    f"${format_currency(total_commission(invoices))}",
                ]
            )
            table = Table(rows, colWidths=[60, 90, 150, 90, 90], repeatRows=1)
            table.setStyle(_table_style(with_total_row=True))
            elements.append(table)
        else:
            elements.append(
                Paragraph("No hay facturas en este período.", self._normal)
            )
        return self._build(output, elements)

    def render_annual_report(
        self,
        statistics: AnnualStatistics,
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render one row per month with sales, commission and growth."""
        elements = self._header(
            "Resumen Anual de Comisiones",
            str(statistics.year),
            seller_name,
        )
        rows = [["Mes", "Facturas", "Ventas", "Comisión", "Crecimiento"]]
        for bucket in statistics.monthly:
            growth = "-" if bucket.growth is None else format_percent(
                bucket.growth
            )
            rows.append(
                [
                    month_name(bucket.month).capitalize(),
                    str(bucket.count),
                    f"${format_currency(bucket.sales)}",
                    f"${format_currency(bucket.commission)}",
                    growth,
                ]
            )
        rows.append(
            [
                "Total",
                str(statistics.invoice_count),
                f"${format_currency(statistics.total_sales)}",
                f"${format_currency(statistics.total_commission)}",
                "",
            ]
        )
        table = Table(rows, colWidths=[90, 60, 110, 110, 80], repeatRows=1)
        table.setStyle(_table_style(with_total_row=True))
        elements.append(table)
        if statistics.best_month is not None:
            elements.extend(
                [
                    Spacer(1, 6 * mm),
                    Paragraph(
                        "Mejor mes: "
                        f"{month_name(statistics.best_month.month).capitalize()} "
                        f"(${format_currency(statistics.best_month.commission)})",
                        self._normal,
                    ),
                ]
            )
        return self._build(output, elements)

    def render_breakdown_report(
        self,
        breakdown: MonthlyProductBreakdown,
        seller_name: str | None,
        output: Path,
    ) -> Path:
        """Render each product's sales of the month, then the rest."""
        elements = self._header(
            "Desglose por Producto",
            month_label(breakdown.year, breakdown.month),
            seller_name,
        )
        sections = list(breakdown.products)
        if breakdown.rest.entries:
            sections.append(breakdown.rest)
        if not sections:
            elements.append(
                Paragraph("No hay ventas registradas este mes.", self._normal)
            )
        for section in sections:
            elements.extend(self._breakdown_section(section))
        elements.append(
            Paragraph(
                "Comisión total: "
                f"${format_currency(breakdown.grand_total_commission)}",
                self._heading,
            )
        )
        return self._build(output, elements)

    def _breakdown_section(self, section: ProductBreakdown) -> list:
        label = section.name
        if section.percentage is not None:
            label = f"{label} ({format_percent(section.percentage)})"
        rows = [["NCF", "Fecha", "Cliente", "Monto"]]
        for entry in section.entries:
            rows.append(
                [
                    entry.ncf,
                    entry.date.strftime("%d/%m/%Y"),
                    self._truncate(entry.client_name or "-", 30),
                    f"${format_currency(entry.amount)}",
                ]
            )
        rows.append(
            [
                "Total",
                "",
                f"Comisión ${format_currency(section.total_commission)}",
                f"${format_currency(section.total_amount)}",
            ]
        )
        table = Table(rows, colWidths=[100, 70, 170, 100], repeatRows=1)
        table.setStyle(_table_style(with_total_row=True))
        return [Paragraph(label, self._heading), table, Spacer(1, 6 * mm)]

    def _header(
        self,
        title: str,
        subtitle: str,
        seller_name: str | None,
    ) -> list:
        elements = [
            Paragraph(title, self._title),
            Paragraph(subtitle, self._heading),
        ]
        if seller_name:
            elements.append(Paragraph(f"Vendedor: {seller_name}", self._normal))
        elements.append(
            Paragraph(
                f"Generado el: {datetime.now():%d/%m/%Y %H:%M}",
                self._normal,
            )
        )
        elements.append(Spacer(1, 8 * mm))
        return elements

    def _build(self, output: Path, elements: list) -> Path:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
        )
        doc.build(elements)
        self._logger.info(f"PDF written to {output_path}")
        return output_path

    @staticmethod
    def _date(invoice: Invoice) -> str:
        if invoice.invoice_date is None:
            return "-"
        return invoice.invoice_date.strftime("%d/%m/%Y")

    @staticmethod
    def _truncate(text: str, limit: int) -> str:
        if len(text) > limit:
            return text[: limit - 3] + "..."
        return text


__all__ = ["ReportLabReportRenderer"]
