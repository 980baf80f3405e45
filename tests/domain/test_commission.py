"""Tests for the commission calculator."""

from datetime import date
from decimal import Decimal

from commission_desk.domain.models import Product
from commission_desk.domain.services.commission import (
    apply_product_percentage,
    commission_for,
    compute_breakdown,
    compute_line,
    recompute_invoice,
)


def _product(product_id: str, name: str, percentage: str) -> Product:
    return Product(
        id=product_id,
        name=name,
        percentage=Decimal(percentage),
        color="#10b981",
    )


def test_compute_breakdown_splits_products_and_rest() -> None:
    """A 1000 invoice with 200 at 15% and rest at 25% earns 230."""
    products = [_product("p1", "Tintes", "15")]

    breakdown = compute_breakdown(
        Decimal("1000"),
        {"p1": Decimal("200")},
        products,
        Decimal("25"),
    )

    assert breakdown.special_total == Decimal("200")
    assert breakdown.rest_amount == Decimal("800")
    assert breakdown.rest_commission == Decimal("200")
    assert breakdown.lines[0].commission == Decimal("30")
    assert breakdown.total_commission == Decimal("230")
    assert breakdown.product_commission == Decimal("30")


def test_compute_breakdown_clamps_rest_when_products_exceed_total() -> None:
    """Special amounts above the total leave a zero rest, without error."""
    products = [_product("p1", "Tintes", "10")]

    breakdown = compute_breakdown(
        Decimal("100"),
        {"p1": Decimal("150")},
        products,
        Decimal("25"),
    )

    assert breakdown.rest_amount == Decimal("0")
    assert breakdown.rest_commission == Decimal("0")
    assert breakdown.total_commission == Decimal("15")


def test_compute_breakdown_ignores_unknown_ids_and_defaults_missing() -> None:
    """Amounts for ids outside the catalog are ignored; missing ones are 0."""
    products = [
        _product("p1", "Tintes", "15"),
        _product("p2", "Lacas", "10"),
    ]

    breakdown = compute_breakdown(
        "500",
        {"p1": Decimal("100"), "ghost": Decimal("300")},
        products,
        "20",
    )

    by_name = {line.name: line for line in breakdown.lines}
    assert by_name["Lacas"].amount == Decimal("0")
    assert by_name["Lacas"].commission == Decimal("0")
    assert by_name["Tintes"].product_id == "p1"
    assert breakdown.rest_amount == Decimal("400")
    assert breakdown.total_commission == Decimal("95")


def test_compute_breakdown_is_deterministic() -> None:
    products = [_product("p1", "Tintes", "12.5")]
    args = (Decimal("999.99"), {"p1": Decimal("333.33")}, products, "25")

    assert compute_breakdown(*args) == compute_breakdown(*args)


def test_commission_for_keeps_exact_decimals() -> None:
    assert commission_for(Decimal("333.33"), Decimal("12.5")) == Decimal(
        "41.66625"
    )


def test_recompute_invoice_uses_line_percentages() -> None:
    """Edited invoices keep their own snapshot percentages."""
    lines = [compute_line("Tintes", "200", "20")]

    breakdown = recompute_invoice("1000", lines, "30")

    assert breakdown.lines[0].commission == Decimal("40")
    assert breakdown.rest_amount == Decimal("800")
    assert breakdown.total_commission == Decimal("280")


def test_apply_product_percentage_updates_line_and_total(make_invoice) -> None:
    """Moving 15% to 20% adds 10 on a 200 line; the rest is untouched."""
    invoice = make_invoice(lines=[("Tintes", "200", "15")])

    updated = apply_product_percentage(invoice, "Tintes", Decimal("20"))

    line = updated.find_line("Tintes")
    assert line.percentage == Decimal("20")
    assert line.commission == Decimal("40")
    assert updated.rest_commission == invoice.rest_commission
    assert updated.total_commission == Decimal("240")
    assert apply_product_percentage(updated, "Tintes", "20") == updated


def test_apply_product_percentage_without_line_returns_invoice(
    make_invoice,
) -> None:
    invoice = make_invoice(invoice_date=date(2024, 3, 1))

    assert apply_product_percentage(invoice, "Lacas", "50") is invoice
