"""Tests for BulkUpdateProductPercentageUseCase."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from commission_desk.application.use_cases.statistics import (
    BulkUpdateProductPercentageUseCase,
)
from commission_desk.domain.errors import BulkUpdateError, ValidationError
from commission_desk.infrastructure.invoice_repository import (
    SqlAlchemyInvoiceRepository,
)


def _month_invoices(make_invoice):
    return [
        make_invoice(invoice_id="a", lines=[("Tintes", "200", "15")]),
        make_invoice(
            invoice_id="b",
            ncf="B0100000002",
            invoice_date=date(2024, 3, 20),
            lines=[("Lacas", "100", "10")],
        ),
        make_invoice(
            invoice_id="c",
            ncf="B0100000003",
            invoice_date=date(2024, 3, 25),
            lines=[("Tintes", "400", "15")],
        ),
        make_invoice(
            invoice_id="d",
            ncf="B0100000004",
            invoice_date=date(2024, 4, 2),
            lines=[("Tintes", "100", "15")],
        ),
    ]


def test_bulk_update_rewrites_lines_of_the_month(make_invoice) -> None:
    """Only March invoices carrying the product are rewritten."""
    invoice_repo = MagicMock()
    invoice_repo.list_invoices.return_value = _month_invoices(make_invoice)
    use_case = BulkUpdateProductPercentageUseCase(
        invoice_repo,
        logger=MagicMock(),
    )

    result = use_case.execute(2024, 3, "Tintes", "20")

    assert result.updated_count == 2
    assert result.skipped_count == 1
    assert result.updated_invoice_ids == ["a", "c"]
    assert result.new_percentage == Decimal("20")
    first_call = invoice_repo.update_line_percentage.call_args_list[0]
    assert first_call.args == (
        "a",
        "Tintes",
        Decimal("20"),
        Decimal("40"),
        Decimal("240"),
    )


def test_bulk_update_failure_reports_partial_count(make_invoice) -> None:
    invoice_repo = MagicMock()
    invoice_repo.list_invoices.return_value = _month_invoices(make_invoice)
    invoice_repo.update_line_percentage.side_effect = [
        None,
        RuntimeError("disk full"),
    ]
    use_case = BulkUpdateProductPercentageUseCase(
        invoice_repo,
        logger=MagicMock(),
    )

    with pytest.raises(BulkUpdateError) as exc_info:
        use_case.execute(2024, 3, "Tintes", "20")

    assert exc_info.value.updated_count == 1


def test_bulk_update_validates_percentage(make_invoice) -> None:
    invoice_repo = MagicMock()
    invoice_repo.list_invoices.return_value = _month_invoices(make_invoice)

    with pytest.raises(ValidationError):
        BulkUpdateProductPercentageUseCase(
            invoice_repo,
            logger=MagicMock(),
        ).execute(2024, 3, "Tintes", "-1")
    invoice_repo.update_line_percentage.assert_not_called()


def test_bulk_update_in_sqlite_changes_only_the_product_line(
    db_port,
    logger,
    make_invoice,
) -> None:
    """Moving X from 10% to 15% adds exactly 5 to each invoice's total."""
    invoice_repo = SqlAlchemyInvoiceRepository(db_port, logger=logger)
    for index in range(1, 4):
        invoice_repo.add_invoice(
            make_invoice(
                invoice_id=f"inv-{index}",
                ncf=f"B010000000{index}",
                invoice_date=date(2024, 3, index * 5),
                lines=[("X", "100", "10"), ("Y", "200", "20")],
            )
        )
    before = {invoice.id: invoice for invoice in invoice_repo.list_invoices()}
    use_case = BulkUpdateProductPercentageUseCase(invoice_repo, logger=logger)

    result = use_case.execute(2024, 3, "X", "15")

    assert result.updated_count == 3
    after = {invoice.id: invoice for invoice in invoice_repo.list_invoices()}
    for invoice_id, old in before.items():
        new = after[invoice_id]
        assert new.total_commission - old.total_commission == Decimal("5")
        assert new.find_line("X").percentage == Decimal("15")
        assert new.find_line("X").commission == Decimal("15")
        assert new.find_line("Y") == old.find_line("Y")
        assert new.rest_amount == old.rest_amount
        assert new.rest_percentage == old.rest_percentage
        assert new.rest_commission == old.rest_commission
        assert new.total_amount == old.total_amount

    use_case.execute(2024, 3, "X", "15")

    again = {invoice.id: invoice for invoice in invoice_repo.list_invoices()}
    assert again == after
