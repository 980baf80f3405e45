"""Tests for the table and label helpers of the Streamlit pages."""

from datetime import date
from decimal import Decimal

from commission_desk.adapters.interface.streamlit.breakdown_page import (
    section_rows,
)
from commission_desk.adapters.interface.streamlit.calculator_page import (
    NO_CLIENT_LABEL,
    breakdown_rows,
    client_options,
)
from commission_desk.adapters.interface.streamlit.history_page import (
    invoice_rows,
)
from commission_desk.adapters.interface.streamlit.statistics_page import (
    format_change,
)
from commission_desk.domain.models import (
    Client,
    PeriodChange,
    Product,
    ProductBreakdown,
    ProductBreakdownEntry,
)
from commission_desk.domain.services.commission import compute_breakdown


def test_breakdown_rows_list_sold_products_then_rest() -> None:
    products = [
        Product(id="p1", name="Tintes", percentage=Decimal("15"), color="#1"),
        Product(id="p2", name="Lacas", percentage=Decimal("10"), color="#2"),
    ]
    breakdown = compute_breakdown(
        Decimal("1000"),
        {"p1": Decimal("200")},
        products,
        Decimal("25"),
    )

    rows = breakdown_rows(breakdown)

    assert rows == [
        {
            "Producto": "Tintes",
            "Monto": "$200.00",
            "%": "15.0%",
            "Comisión": "$30.00",
        },
        {
            "Producto": "Resto de Productos",
            "Monto": "$800.00",
            "%": "25.0%",
            "Comisión": "$200.00",
        },
    ]


def test_client_options_disambiguate_duplicate_names() -> None:
    options = client_options(
        [
            Client(id="abcdef123", name="Ana"),
            Client(id="zyxwvu987", name="Ana"),
        ]
    )

    assert options == {
        NO_CLIENT_LABEL: None,
        "Ana": "abcdef123",
        "Ana (zyxwvu)": "zyxwvu987",
    }


def test_invoice_rows_show_client_names(make_invoice) -> None:
    rows = invoice_rows(
        [
            make_invoice(client_id="c1", invoice_date=date(2024, 12, 5)),
            make_invoice(invoice_id="inv-2", invoice_date=None),
        ],
        {"c1": "Ana"},
    )

    assert rows[0]["Fecha"] == "5 de diciembre"
    assert rows[0]["Cliente"] == "Ana"
    assert rows[0]["Comisión"] == "$250.00"
    assert rows[1]["Fecha"] == "-"
    assert rows[1]["Cliente"] == "-"


def test_section_rows_fill_missing_client() -> None:
    section = ProductBreakdown(
        name="Tintes",
        percentage=Decimal("15"),
        entries=[
            ProductBreakdownEntry(
                ncf="B0100000001",
                date=date(2024, 3, 10),
                amount=Decimal("1200"),
            )
        ],
        total_amount=Decimal("1200"),
        total_commission=Decimal("180"),
    )

    assert section_rows(section) == [
        {
            "NCF": "B0100000001",
            "Fecha": "10 de marzo",
            "Cliente": "-",
            "Monto": "$1,200.00",
        }
    ]


def test_format_change_signs_the_percentage() -> None:
    assert format_change(PeriodChange(Decimal("12.34"), True)) == "+12.3%"
    assert format_change(PeriodChange(Decimal("5"), False)) == "-5.0%"
