"""SQLAlchemy repository for invoices and their product lines."""

import uuid
from collections import defaultdict
from decimal import Decimal
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.domain.errors import DuplicateNcfError, NotFoundError
from commission_desk.domain.models import Invoice, InvoiceLine
from commission_desk.domain.services.dates import parse_invoice_date
from commission_desk.infrastructure.sqlalchemy_base import (
    SqlAlchemyRepository,
    parse_timestamp,
    to_db_number,
    to_db_timestamp,
)
from commission_desk.utils.decimal_utils import coerce_decimal_or_zero


INVOICE_COLUMNS = """
    id, ncf, invoice_date, total_amount, rest_amount, rest_percentage,
    rest_commission, total_commission, client_id, seller_id, created_at
"""

SELECT_INVOICES_SQL = text(
    f"""
    SELECT {INVOICE_COLUMNS}
    FROM invoices
    ORDER BY invoice_date DESC, created_at DESC
    """
)

SELECT_INVOICE_SQL = text(
    f"""
    SELECT {INVOICE_COLUMNS}
    FROM invoices
    WHERE id = :id
    """
)

SELECT_LINES_SQL = text(
    """
    SELECT invoice_id, product_name, amount, percentage, commission
    FROM invoice_products
    ORDER BY invoice_id, product_name
    """
)

SELECT_INVOICE_LINES_SQL = text(
    """
    SELECT invoice_id, product_name, amount, percentage, commission
    FROM invoice_products
    WHERE invoice_id = :invoice_id
    ORDER BY product_name
    """
)

INSERT_INVOICE_SQL = text(
    """
    INSERT INTO invoices (
        id, ncf, invoice_date, total_amount, rest_amount, rest_percentage,
        rest_commission, total_commission, client_id, seller_id, created_at
    )
    VALUES (
        :id, :ncf, :invoice_date, :total_amount, :rest_amount,
        :rest_percentage, :rest_commission, :total_commission, :client_id,
        :seller_id, :created_at
    )
    """
)

UPDATE_INVOICE_SQL = text(
    """
    UPDATE invoices
    SET ncf = :ncf,
        invoice_date = :invoice_date,
        total_amount = :total_amount,
        rest_amount = :rest_amount,
        rest_percentage = :rest_percentage,
        rest_commission = :rest_commission,
        total_commission = :total_commission,
        client_id = :client_id,
        seller_id = :seller_id
    WHERE id = :id
    """
)

INSERT_LINE_SQL = text(
    """
    INSERT INTO invoice_products (
        id, invoice_id, product_name, amount, percentage, commission
    )
    VALUES (
        :id, :invoice_id, :product_name, :amount, :percentage, :commission
    )
    """
)

UPDATE_LINE_PERCENTAGE_SQL = text(
    """
    UPDATE invoice_products
    SET percentage = :percentage, commission = :commission
    WHERE invoice_id = :invoice_id AND product_name = :product_name
    """
)

UPDATE_TOTAL_COMMISSION_SQL = text(
    """
    UPDATE invoices
    SET total_commission = :total_commission
    WHERE id = :id
    """
)

DELETE_INVOICE_LINES_SQL = text(
    "DELETE FROM invoice_products WHERE invoice_id = :invoice_id"
)
DELETE_INVOICE_SQL = text("DELETE FROM invoices WHERE id = :id")
DELETE_ALL_LINES_SQL = text("DELETE FROM invoice_products")
DELETE_ALL_INVOICES_SQL = text("DELETE FROM invoices")

NCF_EXISTS_SQL = text("SELECT 1 FROM invoices WHERE ncf = :ncf LIMIT 1")
NCF_EXISTS_EXCLUDING_SQL = text(
    "SELECT 1 FROM invoices WHERE ncf = :ncf AND id <> :exclude_id LIMIT 1"
)


class SqlAlchemyInvoiceRepository(SqlAlchemyRepository, InvoiceRepositoryPort):
    """Invoice repository backed by SQLAlchemy Core statements."""

    def list_invoices(self) -> list[Invoice]:
        """Return every invoice with its lines, newest first."""

        def _load() -> list[Invoice]:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                invoice_rows = conn.execute(SELECT_INVOICES_SQL).all()
                line_rows = conn.execute(SELECT_LINES_SQL).all()
            lines = defaultdict(list)
            for row in line_rows:
                lines[row.invoice_id].append(self._to_line(row._mapping))
            return [
                self._to_invoice(row._mapping, lines.get(row.id, []))
                for row in invoice_rows
            ]

        invoices = self._run("list invoices", _load)
        self._logger.debug(f"Loaded {len(invoices)} invoices")
        return invoices

    def get_invoice(self, invoice_id: str) -> Invoice | None:
        def _load() -> Invoice | None:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                row = conn.execute(
                    SELECT_INVOICE_SQL,
                    {"id": invoice_id},
                ).first()
                if row is None:
                    return None
                line_rows = conn.execute(
                    SELECT_INVOICE_LINES_SQL,
                    {"invoice_id": invoice_id},
                ).all()
            return self._to_invoice(
                row._mapping,
                [self._to_line(line._mapping) for line in line_rows],
            )

        return self._run("get invoice", _load)

    def add_invoice(self, invoice: Invoice) -> Invoice:
        """Insert an invoice and its lines in one transaction.

        Raises:
            DuplicateNcfError: If another invoice already uses the NCF.
        """

        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                self._write_invoice(conn, INSERT_INVOICE_SQL, invoice)
                self._insert_lines(conn, invoice)

        self._run("add invoice", _write)
        return invoice

    def update_invoice(self, invoice: Invoice) -> Invoice:
        """Overwrite an invoice and replace all of its lines.

        Raises:
            NotFoundError: If the invoice does not exist.
            DuplicateNcfError: If another invoice already uses the NCF.
        """

        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                result = self._write_invoice(conn, UPDATE_INVOICE_SQL, invoice)
                if result.rowcount == 0:
                    return 0
                conn.execute(
                    DELETE_INVOICE_LINES_SQL,
                    {"invoice_id": invoice.id},
                )
                self._insert_lines(conn, invoice)
                return result.rowcount

        if self._run("update invoice", _write) == 0:
            raise NotFoundError(f"Invoice {invoice.id} not found")
        return invoice

    def update_line_percentage(
        self,
        invoice_id: str,
        product_name: str,
        percentage: Decimal,
        commission: Decimal,
        total_commission: Decimal,
    ) -> None:
        """Rewrite one line and the invoice total in a single transaction.

        Raises:
            NotFoundError: If the invoice does not exist.
        """

        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(
                    UPDATE_LINE_PERCENTAGE_SQL,
                    {
                        "invoice_id": invoice_id,
                        "product_name": product_name,
                        "percentage": to_db_number(percentage),
                        "commission": to_db_number(commission),
                    },
                )
                result = conn.execute(
                    UPDATE_TOTAL_COMMISSION_SQL,
                    {
                        "id": invoice_id,
                        "total_commission": to_db_number(total_commission),
                    },
                )
                return result.rowcount

        if self._run("update invoice line", _write) == 0:
            raise NotFoundError(f"Invoice {invoice_id} not found")

    def delete_invoice(self, invoice_id: str) -> None:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(
                    DELETE_INVOICE_LINES_SQL,
                    {"invoice_id": invoice_id},
                )
                conn.execute(DELETE_INVOICE_SQL, {"id": invoice_id})

        self._run("delete invoice", _write)

    def ncf_exists(self, ncf: str, exclude_id: str | None = None) -> bool:
        def _load() -> bool:
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                if exclude_id is None:
                    row = conn.execute(NCF_EXISTS_SQL, {"ncf": ncf}).first()
                else:
                    row = conn.execute(
                        NCF_EXISTS_EXCLUDING_SQL,
                        {"ncf": ncf, "exclude_id": exclude_id},
                    ).first()
            return row is not None

        return self._run("check NCF", _load)

    def delete_all(self) -> None:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(DELETE_ALL_LINES_SQL)
                conn.execute(DELETE_ALL_INVOICES_SQL)

        self._run("delete all invoices", _write)

    def _write_invoice(self, conn, statement, invoice: Invoice):
        try:
            return conn.execute(statement, self._invoice_params(invoice))
        except IntegrityError as exc:
            if "ncf" not in str(exc.orig).lower():
                raise
            self._logger.warning(f"NCF {invoice.ncf} is already in use")
            raise DuplicateNcfError(
                f"NCF {invoice.ncf} is already used by another invoice"
            ) from exc

    @staticmethod
    def _invoice_params(invoice: Invoice) -> dict[str, Any]:
        return {
            "id": invoice.id,
            "ncf": invoice.ncf,
            "invoice_date": to_db_timestamp(invoice.invoice_date),
            "total_amount": to_db_number(invoice.total_amount),
            "rest_amount": to_db_number(invoice.rest_amount),
            "rest_percentage": to_db_number(invoice.rest_percentage),
            "rest_commission": to_db_number(invoice.rest_commission),
            "total_commission": to_db_number(invoice.total_commission),
            "client_id": invoice.client_id,
            "seller_id": invoice.seller_id,
            "created_at": to_db_timestamp(invoice.created_at),
        }

    @staticmethod
    def _insert_lines(conn, invoice: Invoice) -> None:
        payload = [
            {
                "id": str(uuid.uuid4()),
                "invoice_id": invoice.id,
                "product_name": line.name,
                "amount": to_db_number(line.amount),
                "percentage": to_db_number(line.percentage),
                "commission": to_db_number(line.commission),
            }
            for line in invoice.products
        ]
        if payload:
            conn.execute(INSERT_LINE_SQL, payload)

    def _number(self, mapping, field: str) -> Decimal:
        return coerce_decimal_or_zero(
            mapping[field],
            logger=self._logger,
            field=field,
        )

    def _to_line(self, mapping) -> InvoiceLine:
        return InvoiceLine(
            name=mapping["product_name"],
            amount=self._number(mapping, "amount"),
            percentage=self._number(mapping, "percentage"),
            commission=self._number(mapping, "commission"),
        )

    def _to_invoice(self, mapping, lines: list[InvoiceLine]) -> Invoice:
        raw_date = mapping["invoice_date"]
        return Invoice(
            id=mapping["id"],
            ncf=mapping["ncf"],
            invoice_date=(
                parse_invoice_date(raw_date, logger=self._logger)
                if raw_date
                else None
            ),
            total_amount=self._number(mapping, "total_amount"),
            rest_amount=self._number(mapping, "rest_amount"),
            rest_percentage=self._number(mapping, "rest_percentage"),
            rest_commission=self._number(mapping, "rest_commission"),
            total_commission=self._number(mapping, "total_commission"),
            products=lines,
            client_id=mapping["client_id"],
            seller_id=mapping["seller_id"],
            created_at=parse_timestamp(mapping["created_at"]),
        )


__all__ = ["SqlAlchemyInvoiceRepository"]
