"""Domain models for aggregated statistics."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Literal

from commission_desk.domain.models.invoices import Invoice


@dataclass(frozen=True)
class DayBucket:
    """Sales, commission and invoice count for one calendar day."""

    day: int
    date: date
    sales: Decimal
    commission: Decimal
    count: int


@dataclass(frozen=True)
class RevenueSource:
    """Commission contribution of a product or of the rest category."""

    name: str
    kind: Literal["product", "rest"]
    sales: Decimal
    commission: Decimal


@dataclass(frozen=True)
class MonthBucket:
    """Sales, commission and invoice count for one month of a year.

    Attributes:
        month: Month number, 1 to 12.
        growth: Commission growth versus the previous month in percent, or
            ``None`` for January where no prior month exists in the year.
        product_ranking: Revenue sources of the month by commission.
    """

    month: int
    sales: Decimal
    commission: Decimal
    count: int
    growth: Decimal | None = None
    product_ranking: list[RevenueSource] = field(default_factory=list)


@dataclass(frozen=True)
class ClientPerformance:
    """Purchases aggregated for one client."""

    client_id: str
    name: str
    amount: Decimal
    count: int


@dataclass(frozen=True)
class PeriodChange:
    """Period-over-period change.

    Attributes:
        percent: Absolute change in percent; 0 when the previous value is 0.
        is_positive: True when the current value is at least the previous one.
    """

    percent: Decimal
    is_positive: bool


@dataclass(frozen=True)
class MonthlyStatistics:
    """Statistics for a selected month."""

    year: int
    month: int
    total_sales: Decimal
    total_commission: Decimal
    invoice_count: int
    average_commission: Decimal
    invoices: list[Invoice]
    daily: list[DayBucket]
    best_day: DayBucket | None
    top_client: ClientPerformance | None
    client_ranking: list[ClientPerformance]
    revenue_sources: list[RevenueSource]
    record_invoice: Invoice | None
    commission_change: PeriodChange
    sales_change: PeriodChange
    invoice_change: PeriodChange
    narrative: str


@dataclass(frozen=True)
class AnnualStatistics:
    """Statistics for a selected year or month range."""

    year: int
    total_sales: Decimal
    total_commission: Decimal
    invoice_count: int
    monthly: list[MonthBucket]
    best_month: MonthBucket | None


@dataclass(frozen=True)
class ProductBreakdownEntry:
    """One invoice contribution to a product breakdown."""

    ncf: str
    date: date
    amount: Decimal
    client_id: str | None = None
    client_name: str | None = None


@dataclass(frozen=True)
class ProductBreakdown:
    """Entries and totals of one product (or the rest) over a period."""

    name: str
    percentage: Decimal | None
    entries: list[ProductBreakdownEntry]
    total_amount: Decimal
    total_commission: Decimal


@dataclass(frozen=True)
class MonthlyProductBreakdown:
    """Per-product breakdown of a month, used by the breakdown view."""

    year: int
    month: int
    products: list[ProductBreakdown]
    rest: ProductBreakdown
    grand_total_commission: Decimal


@dataclass(frozen=True)
class BulkUpdateResult:
    """Outcome of rewriting a product percentage across invoices."""

    product_name: str
    new_percentage: Decimal
    updated_count: int
    skipped_count: int
    updated_invoice_ids: list[str] = field(default_factory=list)


__all__ = [
    "DayBucket",
    "RevenueSource",
    "MonthBucket",
    "ClientPerformance",
    "PeriodChange",
    "MonthlyStatistics",
    "AnnualStatistics",
    "ProductBreakdownEntry",
    "ProductBreakdown",
    "MonthlyProductBreakdown",
    "BulkUpdateResult",
]
