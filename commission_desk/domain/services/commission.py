"""Commission calculation for a single invoice."""

from collections.abc import Mapping, Sequence
from dataclasses import replace
from decimal import Decimal

from commission_desk.domain.models import (
    BreakdownLine,
    CommissionBreakdown,
    Invoice,
    InvoiceLine,
    Product,
)
from commission_desk.utils.decimal_utils import HUNDRED, coerce_decimal


def commission_for(amount, percentage) -> Decimal:
    """Return ``amount * percentage / 100`` as an exact Decimal."""
    return coerce_decimal(amount) * (coerce_decimal(percentage) / HUNDRED)


def compute_line(name: str, amount, percentage) -> InvoiceLine:
    """Build an invoice line with its commission."""
    amount_value = coerce_decimal(amount)
    percentage_value = coerce_decimal(percentage)
    return InvoiceLine(
        name=name,
        amount=amount_value,
        percentage=percentage_value,
        commission=commission_for(amount_value, percentage_value),
    )


def _finish_breakdown(
    lines: list[BreakdownLine],
    total_invoice: Decimal,
    rest_percentage: Decimal,
) -> CommissionBreakdown:
    special_total = sum((line.amount for line in lines), start=Decimal("0"))
    rest_amount = max(Decimal("0"), total_invoice - special_total)
    rest_commission = commission_for(rest_amount, rest_percentage)
    product_commission = sum(
        (line.commission for line in lines),
        start=Decimal("0"),
    )
    return CommissionBreakdown(
        lines=lines,
        special_total=special_total,
        rest_amount=rest_amount,
        rest_percentage=rest_percentage,
        rest_commission=rest_commission,
        total_commission=product_commission + rest_commission,
    )


def compute_breakdown(
    total_invoice,
    product_amounts: Mapping[str, Decimal],
    products: Sequence[Product],
    rest_percentage,
) -> CommissionBreakdown:
    """Compute the commission breakdown of an invoice.

    Special amounts exceeding the invoice total are absorbed: the rest amount
    is clamped to zero and no error is raised.

    Args:
        total_invoice: Invoice total.
        product_amounts: Amount sold per product id; missing ids count as 0.
        products: Active catalog products.
        rest_percentage: Percentage applied to the residual amount.

    Returns:
        CommissionBreakdown: Per-product lines plus rest and totals.
    """
    lines = []
    for product in products:
        line = compute_line(
            product.name,
            product_amounts.get(product.id, Decimal("0")),
            product.percentage,
        )
        lines.append(
            BreakdownLine(
                name=line.name,
                amount=line.amount,
                percentage=line.percentage,
                commission=line.commission,
                product_id=product.id,
                color=product.color,
            )
        )
    return _finish_breakdown(
        lines,
        coerce_decimal(total_invoice),
        coerce_decimal(rest_percentage),
    )


def recompute_invoice(
    total_amount,
    lines: Sequence[InvoiceLine],
    rest_percentage,
) -> CommissionBreakdown:
    """Recompute every derived field of an explicitly edited invoice.

    Each line keeps its own snapshot percentage; commissions are derived
    again from amount and percentage.
    """
    breakdown_lines = []
    for line in lines:
        fresh = compute_line(line.name, line.amount, line.percentage)
        breakdown_lines.append(
            BreakdownLine(
                name=fresh.name,
                amount=fresh.amount,
                percentage=fresh.percentage,
                commission=fresh.commission,
            )
        )
    return _finish_breakdown(
        breakdown_lines,
        coerce_decimal(total_amount),
        coerce_decimal(rest_percentage),
    )


def apply_product_percentage(
    invoice: Invoice,
    product_name: str,
    new_percentage,
) -> Invoice:
    """Return the invoice with one product line moved to a new percentage.

    Only the named line and the invoice total commission change; the rest
    bucket and other lines keep their stored values. Invoices without the
    product are returned unchanged.
    """
    if invoice.find_line(product_name) is None:
        return invoice
    percentage = coerce_decimal(new_percentage)
    products = [
        compute_line(line.name, line.amount, percentage)
        if line.name == product_name
        else line
        for line in invoice.products
    ]
    total_commission = sum(
        (line.commission for line in products),
        start=Decimal("0"),
    ) + invoice.rest_commission
    return replace(
        invoice,
        products=products,
        total_commission=total_commission,
    )


__all__ = [
    "commission_for",
    "compute_line",
    "compute_breakdown",
    "recompute_invoice",
    "apply_product_percentage",
]
