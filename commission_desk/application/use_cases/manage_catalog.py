"""Use cases maintaining the product, client and seller catalogs."""

import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
    ProductRepositoryPort,
    SellerRepositoryPort,
)
from commission_desk.domain.constants import PRODUCT_COLORS
from commission_desk.domain.errors import NotFoundError, ValidationError
from commission_desk.domain.models import Client, Product, Seller
from commission_desk.domain.services.validation import (
    validate_name,
    validate_percentage,
)
from commission_desk.infrastructure.logging.logger import get_app_logger


def _new_id() -> str:
    return str(uuid.uuid4())


def _optional_text(value: str | None) -> str | None:
    cleaned = (value or "").strip()
    return cleaned or None


def palette_color(position: int) -> str:
    """Return the chart colour assigned to a catalog position."""
    return PRODUCT_COLORS[position % len(PRODUCT_COLORS)]


class ManageProductsUseCase:
    """Add, edit and remove commission products.

    Editing a product never touches stored invoices: their lines keep the
    name and percentage captured when they were saved.
    """

    def __init__(
        self,
        product_repo: ProductRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or _new_id
        self._clock = clock or datetime.now

    def list_products(self) -> list[Product]:
        return self._product_repo.list_products()

    def add(self, name: str, percentage) -> Product:
        """Create a product with the next palette colour.

        Raises:
            ValidationError: If the name is blank, already used, or the
                percentage is outside 0 to 100.
        """
        product_name = validate_name(name, field="product name")
        products = self._product_repo.list_products()
        self._ensure_unique(product_name, products)
        product = Product(
            id=self._id_factory(),
            name=product_name,
            percentage=validate_percentage(percentage),
            color=palette_color(len(products)),
            is_default=False,
            created_at=self._clock(),
        )
        saved = self._product_repo.add_product(product)
        self._logger.info(
            f"Product {saved.name} added at {saved.percentage}%"
        )
        return saved

    def update(
        self,
        product_id: str,
        name: str | None = None,
        percentage=None,
        color: str | None = None,
    ) -> Product:
        """Change a product's name, percentage or colour.

        Raises:
            NotFoundError: If the product does not exist.
            ValidationError: If a new value is rejected.
        """
        products = self._product_repo.list_products()
        current = next((p for p in products if p.id == product_id), None)
        if current is None:
            raise NotFoundError(f"Product {product_id} not found")
        changes = {}
        if name is not None:
            product_name = validate_name(name, field="product name")
            others = [p for p in products if p.id != product_id]
            self._ensure_unique(product_name, others)
            changes["name"] = product_name
        if percentage is not None:
            changes["percentage"] = validate_percentage(percentage)
        if color:
            changes["color"] = color
        updated = self._product_repo.update_product(replace(current, **changes))
        self._logger.info(f"Product {updated.name} updated")
        return updated

    def delete(self, product_id: str) -> None:
        self._product_repo.delete_product(product_id)
        self._logger.info(f"Product {product_id} deleted")

    @staticmethod
    def _ensure_unique(name: str, products: list[Product]) -> None:
        lowered = name.lower()
        if any(product.name.lower() == lowered for product in products):
            raise ValidationError(f"Product {name} already exists")


class ManageClientsUseCase:
    """Add, edit and remove clients."""

    def __init__(
        self,
        client_repo: ClientRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._client_repo = client_repo
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or _new_id
        self._clock = clock or datetime.now

    def list_clients(self) -> list[Client]:
        return self._client_repo.list_clients()

    def add(
        self,
        name: str,
        phone: str | None = None,
        email: str | None = None,
        address: str | None = None,
        notes: str | None = None,
    ) -> Client:
        """Create a client.

        Raises:
            ValidationError: If the name is blank.
        """
        client = Client(
            id=self._id_factory(),
            name=validate_name(name, field="client name"),
            phone=_optional_text(phone),
            email=_optional_text(email),
            address=_optional_text(address),
            notes=_optional_text(notes),
            created_at=self._clock(),
        )
        saved = self._client_repo.add_client(client)
        self._logger.info(f"Client {saved.name} added")
        return saved

    def update(self, client: Client) -> Client:
        """Overwrite a client after validating its name."""
        cleaned = replace(
            client,
            name=validate_name(client.name, field="client name"),
            phone=_optional_text(client.phone),
            email=_optional_text(client.email),
            address=_optional_text(client.address),
            notes=_optional_text(client.notes),
        )
        updated = self._client_repo.update_client(cleaned)
        self._logger.info(f"Client {updated.name} updated")
        return updated

    def delete(self, client_id: str) -> None:
        self._client_repo.delete_client(client_id)
        self._logger.info(f"Client {client_id} deleted")


class ManageSellersUseCase:
    """Maintain the sellers shown on reports and summaries."""

    def __init__(
        self,
        seller_repo: SellerRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._seller_repo = seller_repo
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory or _new_id
        self._clock = clock or datetime.now

    def list_sellers(self) -> list[Seller]:
        return self._seller_repo.list_sellers()

    def default_seller(self) -> Seller | None:
        """Return the default seller, or the first one when none is flagged."""
        sellers = self._seller_repo.list_sellers()
        for seller in sellers:
            if seller.is_default:
                return seller
        return sellers[0] if sellers else None

    def add(
        self,
        name: str,
        email: str | None = None,
        phone: str | None = None,
    ) -> Seller:
        """Create a seller; the first seller becomes the default one."""
        is_first = not self._seller_repo.list_sellers()
        seller = Seller(
            id=self._id_factory(),
            name=validate_name(name, field="seller name"),
            email=_optional_text(email),
            phone=_optional_text(phone),
            is_default=is_first,
            created_at=self._clock(),
        )
        saved = self._seller_repo.add_seller(seller)
        self._logger.info(f"Seller {saved.name} added")
        return saved

    def update(self, seller: Seller) -> Seller:
        cleaned = replace(
            seller,
            name=validate_name(seller.name, field="seller name"),
            email=_optional_text(seller.email),
            phone=_optional_text(seller.phone),
        )
        updated = self._seller_repo.update_seller(cleaned)
        self._logger.info(f"Seller {updated.name} updated")
        return updated

    def delete(self, seller_id: str) -> None:
        """Delete a seller.

        Raises:
            NotFoundError: If the seller does not exist.
            ValidationError: If the seller is the default one.
        """
        seller = self._find(seller_id)
        if seller.is_default:
            raise ValidationError("The default seller cannot be deleted")
        self._seller_repo.delete_seller(seller_id)
        self._logger.info(f"Seller {seller.name} deleted")

    def set_default(self, seller_id: str) -> Seller:
        """Make a seller the default one."""
        seller = self._find(seller_id)
        self._seller_repo.set_default(seller_id)
        self._logger.info(f"Seller {seller.name} set as default")
        return replace(seller, is_default=True)

    def _find(self, seller_id: str) -> Seller:
        for seller in self._seller_repo.list_sellers():
            if seller.id == seller_id:
                return seller
        raise NotFoundError(f"Seller {seller_id} not found")


__all__ = [
    "palette_color",
    "ManageProductsUseCase",
    "ManageClientsUseCase",
    "ManageSellersUseCase",
]
