"""Domain models for invoices and commission breakdowns."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class InvoiceLine:
    """Snapshot of a special product sold on an invoice.

    Attributes:
        name: Product name at the time of sale.
        amount: Amount sold for this product.
        percentage: Commission percentage at the time of sale.
        commission: ``amount * percentage / 100``.
    """

    name: str
    amount: Decimal
    percentage: Decimal
    commission: Decimal


@dataclass(frozen=True)
class Invoice:
    """Persisted invoice carrying its computed breakdown."""

    id: str
    ncf: str
    invoice_date: date | None
    total_amount: Decimal
    rest_amount: Decimal
    rest_percentage: Decimal
    rest_commission: Decimal
    total_commission: Decimal
    products: list[InvoiceLine] = field(default_factory=list)
    client_id: str | None = None
    seller_id: str | None = None
    created_at: datetime | None = None

    def find_line(self, product_name: str) -> InvoiceLine | None:
        """Return the line for a product name, if present."""
        for line in self.products:
            if line.name == product_name:
                return line
        return None


@dataclass(frozen=True)
class BreakdownLine:
    """Commission result for a single catalog product."""

    name: str
    amount: Decimal
    percentage: Decimal
    commission: Decimal
    product_id: str | None = None
    color: str | None = None

    def to_invoice_line(self) -> InvoiceLine:
        return InvoiceLine(
            name=self.name,
            amount=self.amount,
            percentage=self.percentage,
            commission=self.commission,
        )


@dataclass(frozen=True)
class CommissionBreakdown:
    """Itemized commission result for one invoice.

    Attributes:
        lines: Per-product commission lines.
        special_total: Sum of the special product amounts.
        rest_amount: Residual amount, never negative.
        rest_percentage: Percentage applied to the residual.
        rest_commission: Commission earned on the residual.
        total_commission: Product commissions plus rest commission.
    """

    lines: list[BreakdownLine]
    special_total: Decimal
    rest_amount: Decimal
    rest_percentage: Decimal
    rest_commission: Decimal
    total_commission: Decimal

    @property
    def product_commission(self) -> Decimal:
        """Return the commission earned on special products only."""
        return sum(
            (line.commission for line in self.lines),
            start=Decimal("0"),
        )

    def invoice_lines(self) -> list[InvoiceLine]:
        """Return the lines as invoice snapshots."""
        return [line.to_invoice_line() for line in self.lines]


__all__ = [
    "InvoiceLine",
    "Invoice",
    "BreakdownLine",
    "CommissionBreakdown",
]
