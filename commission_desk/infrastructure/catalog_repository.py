"""SQLAlchemy repositories for products, clients and sellers."""

from sqlalchemy import text

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
    ProductRepositoryPort,
    SellerRepositoryPort,
)
from commission_desk.domain.constants import FALLBACK_PRODUCT_COLOR
from commission_desk.domain.errors import NotFoundError, ValidationError
from commission_desk.domain.models import Client, Product, Seller
from commission_desk.infrastructure.sqlalchemy_base import (
    SqlAlchemyRepository,
    parse_timestamp,
    to_db_number,
    to_db_timestamp,
)
from commission_desk.utils.decimal_utils import coerce_decimal_or_zero


SELECT_PRODUCTS_SQL = text(
    """
    SELECT id, name, percentage, color, is_default, created_at
    FROM products
    ORDER BY created_at, name
    """
)

INSERT_PRODUCT_SQL = text(
    """
    INSERT INTO products (id, name, percentage, color, is_default, created_at)
    VALUES (:id, :name, :percentage, :color, :is_default, :created_at)
    """
)

UPDATE_PRODUCT_SQL = text(
    """
    UPDATE products
    SET name = :name, percentage = :percentage, color = :color
    WHERE id = :id
    """
)

DELETE_PRODUCT_SQL = text("DELETE FROM products WHERE id = :id")

SELECT_CLIENTS_SQL = text(
    """
    SELECT id, name, phone, email, address, notes, created_at
    FROM clients
    ORDER BY name
    """
)

INSERT_CLIENT_SQL = text(
    """
    INSERT INTO clients (id, name, phone, email, address, notes, created_at)
    VALUES (:id, :name, :phone, :email, :address, :notes, :created_at)
    """
)

UPDATE_CLIENT_SQL = text(
    """
    UPDATE clients
    SET name = :name, phone = :phone, email = :email,
        address = :address, notes = :notes
    WHERE id = :id
    """
)

CLEAR_CLIENT_REFERENCES_SQL = text(
    "UPDATE invoices SET client_id = NULL WHERE client_id = :id"
)
DELETE_CLIENT_SQL = text("DELETE FROM clients WHERE id = :id")
CLEAR_ALL_CLIENT_REFERENCES_SQL = text(
    "UPDATE invoices SET client_id = NULL WHERE client_id IS NOT NULL"
)
DELETE_ALL_CLIENTS_SQL = text("DELETE FROM clients")

SELECT_SELLERS_SQL = text(
    """
    SELECT id, name, email, phone, is_default, created_at
    FROM sellers
    ORDER BY is_default DESC, name
    """
)

INSERT_SELLER_SQL = text(
    """
    INSERT INTO sellers (id, name, email, phone, is_default, created_at)
    VALUES (:id, :name, :email, :phone, :is_default, :created_at)
    """
)

UPDATE_SELLER_SQL = text(
    """
    UPDATE sellers
    SET name = :name, email = :email, phone = :phone
    WHERE id = :id
    """
)

SELECT_SELLER_DEFAULT_SQL = text(
    "SELECT is_default FROM sellers WHERE id = :id"
)
CLEAR_SELLER_REFERENCES_SQL = text(
    "UPDATE invoices SET seller_id = NULL WHERE seller_id = :id"
)
DELETE_SELLER_SQL = text("DELETE FROM sellers WHERE id = :id")
CLEAR_DEFAULT_SELLER_SQL = text("UPDATE sellers SET is_default = :flag")
SET_DEFAULT_SELLER_SQL = text(
    "UPDATE sellers SET is_default = :flag WHERE id = :id"
)


class SqlAlchemyProductRepository(SqlAlchemyRepository, ProductRepositoryPort):
    """Product catalog backed by SQLAlchemy."""

    def list_products(self) -> list[Product]:
        def _load():
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                return conn.execute(SELECT_PRODUCTS_SQL).all()

        rows = self._run("list products", _load)
        return [
            Product(
                id=row.id,
                name=row.name,
                percentage=coerce_decimal_or_zero(
                    row.percentage,
                    logger=self._logger,
                    field="percentage",
                ),
                color=row.color or FALLBACK_PRODUCT_COLOR,
                is_default=bool(row.is_default),
                created_at=parse_timestamp(row.created_at),
            )
            for row in rows
        ]

    def add_product(self, product: Product) -> Product:
        self._execute("add product", INSERT_PRODUCT_SQL, self._params(product))
        return product

    def update_product(self, product: Product) -> Product:
        """Overwrite a product.

        Raises:
            NotFoundError: If the product does not exist.
        """
        updated = self._execute(
            "update product",
            UPDATE_PRODUCT_SQL,
            self._params(product),
        )
        if updated == 0:
            raise NotFoundError(f"Product {product.id} not found")
        return product

    def delete_product(self, product_id: str) -> None:
        self._execute("delete product", DELETE_PRODUCT_SQL, {"id": product_id})

    def _execute(self, description: str, statement, params) -> int:
        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                return conn.execute(statement, params).rowcount

        return self._run(description, _write)

    @staticmethod
    def _params(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "percentage": to_db_number(product.percentage),
            "color": product.color,
            "is_default": bool(product.is_default),
            "created_at": to_db_timestamp(product.created_at),
        }


class SqlAlchemyClientRepository(SqlAlchemyRepository, ClientRepositoryPort):
    """Client directory backed by SQLAlchemy.

    Deleting a client clears the reference on its invoices.
    """

    def list_clients(self) -> list[Client]:
        def _load():
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                return conn.execute(SELECT_CLIENTS_SQL).all()

        rows = self._run("list clients", _load)
        return [
            Client(
                id=row.id,
                name=row.name,
                phone=row.phone,
                email=row.email,
                address=row.address,
                notes=row.notes,
                created_at=parse_timestamp(row.created_at),
            )
            for row in rows
        ]

    def add_client(self, client: Client) -> Client:
        self.add_clients([client])
        return client

    def add_clients(self, clients: list[Client]) -> int:
        payload = [self._params(client) for client in clients]
        if not payload:
            return 0

        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(INSERT_CLIENT_SQL, payload)

        self._run("add clients", _write)
        return len(payload)

    def update_client(self, client: Client) -> Client:
        """Overwrite a client.

        Raises:
            NotFoundError: If the client does not exist.
        """

        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                return conn.execute(
                    UPDATE_CLIENT_SQL,
                    self._params(client),
                ).rowcount

        if self._run("update client", _write) == 0:
            raise NotFoundError(f"Client {client.id} not found")
        return client

    def delete_client(self, client_id: str) -> None:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(CLEAR_CLIENT_REFERENCES_SQL, {"id": client_id})
                conn.execute(DELETE_CLIENT_SQL, {"id": client_id})

        self._run("delete client", _write)

    def delete_all(self) -> None:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                conn.execute(CLEAR_ALL_CLIENT_REFERENCES_SQL)
                conn.execute(DELETE_ALL_CLIENTS_SQL)

        self._run("delete all clients", _write)

    @staticmethod
    def _params(client: Client) -> dict:
        return {
            "id": client.id,
            "name": client.name,
            "phone": client.phone,
            "email": client.email,
            "address": client.address,
            "notes": client.notes,
            "created_at": to_db_timestamp(client.created_at),
        }


class SqlAlchemySellerRepository(SqlAlchemyRepository, SellerRepositoryPort):
    """Seller directory backed by SQLAlchemy.

    At most one seller carries the default flag, and it cannot be deleted.
    """

    def list_sellers(self) -> list[Seller]:
        def _load():
            engine = self._db_port.get_engine()
            with engine.connect() as conn:
                return conn.execute(SELECT_SELLERS_SQL).all()

        rows = self._run("list sellers", _load)
        return [
            Seller(
                id=row.id,
                name=row.name,
                email=row.email,
                phone=row.phone,
                is_default=bool(row.is_default),
                created_at=parse_timestamp(row.created_at),
            )
            for row in rows
        ]

    def add_seller(self, seller: Seller) -> Seller:
        def _write() -> None:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                if seller.is_default:
                    conn.execute(CLEAR_DEFAULT_SELLER_SQL, {"flag": False})
                conn.execute(INSERT_SELLER_SQL, self._params(seller))

        self._run("add seller", _write)
        return seller

    def update_seller(self, seller: Seller) -> Seller:
        """Overwrite a seller's contact details.

        Raises:
            NotFoundError: If the seller does not exist.
        """

        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                return conn.execute(
                    UPDATE_SELLER_SQL,
                    self._params(seller),
                ).rowcount

        if self._run("update seller", _write) == 0:
            raise NotFoundError(f"Seller {seller.id} not found")
        return seller

    def delete_seller(self, seller_id: str) -> None:
        """Delete a seller and clear it from its invoices.

        Raises:
            NotFoundError: If the seller does not exist.
            ValidationError: If the seller is the default one.
        """

        def _write() -> str:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                row = conn.execute(
                    SELECT_SELLER_DEFAULT_SQL,
                    {"id": seller_id},
                ).first()
                if row is None:
                    return "missing"
                if row.is_default:
                    return "default"
                conn.execute(CLEAR_SELLER_REFERENCES_SQL, {"id": seller_id})
                conn.execute(DELETE_SELLER_SQL, {"id": seller_id})
                return "deleted"

        outcome = self._run("delete seller", _write)
        if outcome == "missing":
            raise NotFoundError(f"Seller {seller_id} not found")
        if outcome == "default":
            raise ValidationError("The default seller cannot be deleted")

    def set_default(self, seller_id: str) -> None:
        """Flag one seller as default and clear the others atomically.

        Raises:
            NotFoundError: If the seller does not exist.
        """

        def _write() -> int:
            engine = self._db_port.get_engine()
            with engine.begin() as conn:
                exists = conn.execute(
                    SELECT_SELLER_DEFAULT_SQL,
                    {"id": seller_id},
                ).first()
                if exists is None:
                    return 0
                conn.execute(CLEAR_DEFAULT_SELLER_SQL, {"flag": False})
                return conn.execute(
                    SET_DEFAULT_SELLER_SQL,
                    {"flag": True, "id": seller_id},
                ).rowcount

        if self._run("set default seller", _write) == 0:
            raise NotFoundError(f"Seller {seller_id} not found")

    @staticmethod
    def _params(seller: Seller) -> dict:
        return {
            "id": seller.id,
            "name": seller.name,
            "email": seller.email,
            "phone": seller.phone,
            "is_default": bool(seller.is_default),
            "created_at": to_db_timestamp(seller.created_at),
        }


__all__ = [
    "SqlAlchemyProductRepository",
    "SqlAlchemyClientRepository",
    "SqlAlchemySellerRepository",
]
