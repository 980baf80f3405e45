"""Tests for the invoice use cases."""

from datetime import date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from commission_desk.application.use_cases.invoices import (
    DeleteInvoiceUseCase,
    ListInvoicesUseCase,
    SaveInvoiceUseCase,
    UpdateInvoiceUseCase,
)
from commission_desk.domain.errors import (
    DuplicateNcfError,
    NotFoundError,
    ValidationError,
)
from commission_desk.domain.models import Product


def _save_use_case(invoice_repo, settings_repo=None):
    products = MagicMock()
    products.list_products.return_value = [
        Product(id="p1", name="Tintes", percentage=Decimal("15"), color="#fff"),
        Product(id="p2", name="Lacas", percentage=Decimal("10"), color="#000"),
    ]
    settings = settings_repo or MagicMock()
    if settings_repo is None:
        settings.get.return_value = "25"
    return SaveInvoiceUseCase(
        invoice_repo,
        products,
        settings,
        logger=MagicMock(),
        id_factory=lambda: "new-id",
        clock=lambda: datetime(2024, 3, 10, 9, 0),
    )


def test_save_invoice_stores_breakdown_and_last_ncf() -> None:
    """Saving computes the snapshot lines and records the NCF suffix."""
    invoice_repo = MagicMock()
    invoice_repo.ncf_exists.return_value = False
    invoice_repo.add_invoice.side_effect = lambda invoice: invoice
    settings = MagicMock()
    settings.get.return_value = "25"
    use_case = _save_use_case(invoice_repo, settings)

    invoice = use_case.execute(
        ncf="B0100000042",
        invoice_date="2024-03-09",
        total_invoice="1000",
        product_amounts={"p1": "200"},
        client_id="",
        seller_id="s1",
    )

    assert invoice.id == "new-id"
    assert invoice.invoice_date == date(2024, 3, 9)
    assert invoice.total_commission == Decimal("230")
    assert [line.name for line in invoice.products] == ["Tintes", "Lacas"]
    assert invoice.find_line("Lacas").amount == Decimal("0")
    assert invoice.client_id is None
    assert invoice.seller_id == "s1"
    settings.set.assert_called_once_with("last_ncf_number", "42")


def test_save_invoice_rejects_duplicate_ncf() -> None:
    invoice_repo = MagicMock()
    invoice_repo.ncf_exists.return_value = True

    with pytest.raises(DuplicateNcfError):
        _save_use_case(invoice_repo).execute(
            "B0100000001",
            date(2024, 3, 1),
            "100",
            {},
        )
    invoice_repo.add_invoice.assert_not_called()


@pytest.mark.parametrize(
    "ncf, total, amounts",
    [
        ("", "100", {}),
        ("B0100000001", "0", {}),
        ("B0100000001", "100", {"p1": "-5"}),
    ],
)
def test_save_invoice_validates_inputs(ncf, total, amounts) -> None:
    invoice_repo = MagicMock()
    invoice_repo.ncf_exists.return_value = False

    with pytest.raises(ValidationError):
        _save_use_case(invoice_repo).execute(ncf, date(2024, 3, 1), total, amounts)
    invoice_repo.add_invoice.assert_not_called()


def test_update_invoice_recomputes_every_derived_field(make_invoice) -> None:
    """Explicit edits recompute lines, rest and totals."""
    current = make_invoice(lines=[("Tintes", "200", "15")])
    invoice_repo = MagicMock()
    invoice_repo.get_invoice.return_value = current
    invoice_repo.ncf_exists.return_value = False
    invoice_repo.update_invoice.side_effect = lambda invoice: invoice
    use_case = UpdateInvoiceUseCase(invoice_repo, logger=MagicMock())

    updated = use_case.execute(
        invoice_id=current.id,
        ncf="B0100000099",
        invoice_date=date(2024, 3, 11),
        total_amount="2000",
        lines=[("Tintes", "500", "20")],
        rest_percentage="30",
    )

    assert updated.rest_amount == Decimal("1500")
    assert updated.total_commission == Decimal("550")
    assert updated.created_at == current.created_at
    invoice_repo.ncf_exists.assert_called_once_with(
        "B0100000099",
        exclude_id=current.id,
    )


def test_update_invoice_missing_raises_not_found() -> None:
    invoice_repo = MagicMock()
    invoice_repo.get_invoice.return_value = None

    with pytest.raises(NotFoundError):
        UpdateInvoiceUseCase(invoice_repo, logger=MagicMock()).execute(
            "ghost",
            "B0100000001",
            date(2024, 1, 1),
            "10",
            [],
            "25",
        )


def test_update_invoice_rejects_ncf_of_other_invoice(make_invoice) -> None:
    invoice_repo = MagicMock()
    invoice_repo.get_invoice.return_value = make_invoice()
    invoice_repo.ncf_exists.return_value = True

    with pytest.raises(DuplicateNcfError):
        UpdateInvoiceUseCase(invoice_repo, logger=MagicMock()).execute(
            "inv-1",
            "B0100000002",
            date(2024, 1, 1),
            "10",
            [],
            "25",
        )
    invoice_repo.update_invoice.assert_not_called()


def test_delete_invoice_delegates_to_repository() -> None:
    invoice_repo = MagicMock()

    DeleteInvoiceUseCase(invoice_repo, logger=MagicMock()).execute("inv-1")

    invoice_repo.delete_invoice.assert_called_once_with("inv-1")


def test_list_invoices_filters_by_month_and_ncf(make_invoice) -> None:
    invoice_repo = MagicMock()
    invoice_repo.list_invoices.return_value = [
        make_invoice(invoice_id="a", ncf="B0100000001"),
        make_invoice(invoice_id="b", ncf="B0100000012"),
        make_invoice(
            invoice_id="c",
            ncf="B0100000013",
            invoice_date=date(2024, 4, 1),
        ),
    ]
    use_case = ListInvoicesUseCase(invoice_repo, logger=MagicMock())

    assert len(use_case.execute()) == 3
    result = use_case.execute(year=2024, month=3, search="b0100")

    assert [invoice.id for invoice in result] == ["a", "b"]
    assert [i.id for i in use_case.execute(search="0012")] == ["b"]
