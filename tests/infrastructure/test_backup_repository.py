"""Tests for SqlAlchemyBackupRepository."""

from decimal import Decimal

from commission_desk.domain.models import Client, Seller
from commission_desk.infrastructure.backup_repository import (
    TABLE_COLUMNS,
    SqlAlchemyBackupRepository,
)
from commission_desk.infrastructure.catalog_repository import (
    SqlAlchemyClientRepository,
    SqlAlchemySellerRepository,
)
from commission_desk.infrastructure.invoice_repository import (
    SqlAlchemyInvoiceRepository,
)


def test_fetch_snapshot_returns_plain_rows(db_port, logger, make_invoice):
    SqlAlchemyClientRepository(db_port, logger=logger).add_client(
        Client(id="c1", name="Ana")
    )
    SqlAlchemyInvoiceRepository(db_port, logger=logger).add_invoice(
        make_invoice(client_id="c1", lines=[("Tintes", "200", "15")])
    )

    snapshot = SqlAlchemyBackupRepository(db_port, logger=logger).fetch_snapshot()

    assert set(snapshot) == set(TABLE_COLUMNS)
    assert snapshot["clients"][0]["name"] == "Ana"
    assert snapshot["invoices"][0]["client_id"] == "c1"
    assert len(snapshot["invoice_products"]) == 1
    assert {row["key"] for row in snapshot["settings"]} == {"rest_percentage"}


def test_replace_all_replaces_invoices_and_upserts_catalogs(
    db_port,
    logger,
    make_invoice,
):
    """Existing invoices are replaced while catalog rows are kept."""
    sellers = SqlAlchemySellerRepository(db_port, logger=logger)
    sellers.add_seller(Seller(id="s-keep", name="Local", is_default=True))
    invoices = SqlAlchemyInvoiceRepository(db_port, logger=logger)
    invoices.add_invoice(make_invoice(invoice_id="local"))
    repo = SqlAlchemyBackupRepository(db_port, logger=logger)

    written = repo.replace_all(
        {
            "sellers": [{"id": "s1", "name": "María", "is_default": False}],
            "clients": [{"id": "c1", "name": "Ana"}],
            "products": [
                {
                    "id": "p1",
                    "name": "Tintes",
                    "percentage": 15,
                    "color": "#f00",
                    "is_default": False,
                }
            ],
            "settings": [{"key": "rest_percentage", "value": "30"}],
            "invoices": [
                {
                    "id": "i1",
                    "ncf": "B0100000007",
                    "invoice_date": "2024-03-10",
                    "total_amount": 1000,
                    "rest_amount": 800,
                    "rest_percentage": 30,
                    "rest_commission": 240,
                    "total_commission": 270,
                    "client_id": "c1",
                    "seller_id": "s1",
                }
            ],
            "invoice_products": [
                {
                    "id": "l1",
                    "invoice_id": "i1",
                    "product_name": "Tintes",
                    "amount": 200,
                    "percentage": 15,
                    "commission": 30,
                }
            ],
        }
    )

    assert written["invoices"] == 1
    assert written["invoice_products"] == 1
    [restored] = invoices.list_invoices()
    assert restored.id == "i1"
    assert restored.total_commission == Decimal("270")
    assert restored.find_line("Tintes").commission == Decimal("30")
    assert {seller.id for seller in sellers.list_sellers()} == {"s-keep", "s1"}
    snapshot = repo.fetch_snapshot()
    assert snapshot["settings"][0]["value"] == "30"


def test_replace_all_moves_default_to_restored_seller(db_port, logger) -> None:
    """A default seller in the snapshot takes over the local default."""
    sellers = SqlAlchemySellerRepository(db_port, logger=logger)
    sellers.add_seller(Seller(id="s-local", name="Local", is_default=True))

    SqlAlchemyBackupRepository(db_port, logger=logger).replace_all(
        {"sellers": [{"id": "s-backup", "name": "María", "is_default": True}]}
    )

    defaults = [seller.id for seller in sellers.list_sellers() if seller.is_default]
    assert defaults == ["s-backup"]


def test_replace_all_keeps_local_default_without_one_in_snapshot(
    db_port,
    logger,
) -> None:
    sellers = SqlAlchemySellerRepository(db_port, logger=logger)
    sellers.add_seller(Seller(id="s-local", name="Local", is_default=True))

    SqlAlchemyBackupRepository(db_port, logger=logger).replace_all(
        {"sellers": [{"id": "s-backup", "name": "María", "is_default": False}]}
    )

    defaults = [seller.id for seller in sellers.list_sellers() if seller.is_default]
    assert defaults == ["s-local"]
