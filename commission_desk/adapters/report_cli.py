"""CLI adapter writing PDF commission reports."""

import argparse
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from commission_desk.application.use_cases.export_report import (
    ExportReportUseCase,
)
from commission_desk.domain.errors import RepositoryError, ValidationError
from commission_desk.infrastructure.container import (
    build_client_repository,
    build_database_adapter,
    build_invoice_repository,
    build_report_renderer,
    build_seller_repository,
    build_settings,
)
from commission_desk.infrastructure.logging.logger import get_app_logger


def _parse_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` into a (year, month) pair."""
    try:
        year_text, month_text = value.split("-")
        year, month = int(year_text), int(month_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid month '{value}'. Expected format YYYY-MM."
        ) from exc
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"Invalid month number in '{value}'.")
    return year, month


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        ) from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Write a PDF report.")
    parser.add_argument("--out", type=Path, help="Output PDF path.")
    modes = parser.add_subparsers(dest="mode", required=True)
    monthly = modes.add_parser("monthly", help="Invoices of one month.")
    monthly.add_argument("month", type=_parse_month, help="YYYY-MM")
    breakdown = modes.add_parser("breakdown", help="Products of one month.")
    breakdown.add_argument("month", type=_parse_month, help="YYYY-MM")
    annual = modes.add_parser("annual", help="Month-by-month year summary.")
    annual.add_argument("year", type=int)
    date_range = modes.add_parser("range", help="Invoices between two days.")
    date_range.add_argument("start", type=_parse_date, help="YYYY-MM-DD")
    date_range.add_argument("end", type=_parse_date, help="YYYY-MM-DD")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Render the requested report.

    Returns:
        int: Process exit code.
    """
    args = parse_args(argv)
    logger = get_app_logger()
    settings = build_settings()
    db_port = build_database_adapter(settings)
    use_case = ExportReportUseCase(
        build_invoice_repository(db_port, settings),
        build_client_repository(db_port, settings),
        build_seller_repository(db_port, settings),
        build_report_renderer(),
        reports_dir=settings.reports_dir,
        logger=logger,
    )
    try:
        if args.mode == "monthly":
            path = use_case.monthly(*args.month, output=args.out)
        elif args.mode == "breakdown":
            path = use_case.breakdown(*args.month, output=args.out)
        elif args.mode == "annual":
            path = use_case.annual(args.year, output=args.out)
        else:
            path = use_case.date_range(args.start, args.end, output=args.out)
    except (ValidationError, RepositoryError, OSError) as exc:
        logger.error(f"Report {args.mode} failed: {exc}")
        print(f"Error: {exc}")
        return 1
    print(f"Report written to {path}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
