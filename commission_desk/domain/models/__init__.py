"""Domain models package."""

from .catalog import Client, Product, Seller
from .invoices import (
    BreakdownLine,
    CommissionBreakdown,
    Invoice,
    InvoiceLine,
)
from .statistics import (
    AnnualStatistics,
    BulkUpdateResult,
    ClientPerformance,
    DayBucket,
    MonthBucket,
    MonthlyProductBreakdown,
    MonthlyStatistics,
    PeriodChange,
    ProductBreakdown,
    ProductBreakdownEntry,
    RevenueSource,
)

__all__ = [
    "Client",
    "Product",
    "Seller",
    "BreakdownLine",
    "CommissionBreakdown",
    "Invoice",
    "InvoiceLine",
    "AnnualStatistics",
    "BulkUpdateResult",
    "ClientPerformance",
    "DayBucket",
    "MonthBucket",
    "MonthlyProductBreakdown",
    "MonthlyStatistics",
    "PeriodChange",
    "ProductBreakdown",
    "ProductBreakdownEntry",
    "RevenueSource",
]
