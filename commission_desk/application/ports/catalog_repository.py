"""Ports for the product, client and seller catalogs."""

from typing import Protocol

from commission_desk.domain.models import Client, Product, Seller


class ProductRepositoryPort(Protocol):
    """Port exposing the product catalog."""

    def list_products(self) -> list[Product]:
        """Return active products ordered by creation."""

    def add_product(self, product: Product) -> Product:
        """Insert a product."""

    def update_product(self, product: Product) -> Product:
        """Overwrite a product."""

    def delete_product(self, product_id: str) -> None:
        """Remove a product from the catalog."""


class ClientRepositoryPort(Protocol):
    """Port exposing the client directory."""

    def list_clients(self) -> list[Client]:
        """Return clients ordered by name."""

    def add_client(self, client: Client) -> Client:
        """Insert a client."""

    def add_clients(self, clients: list[Client]) -> int:
        """Insert several clients and return how many were written."""

    def update_client(self, client: Client) -> Client:
        """Overwrite a client."""

    def delete_client(self, client_id: str) -> None:
        """Delete a client."""

    def delete_all(self) -> None:
        """Delete every client."""


class SellerRepositoryPort(Protocol):
    """Port exposing the seller directory."""

    def list_sellers(self) -> list[Seller]:
        """Return sellers, default seller first."""

    def add_seller(self, seller: Seller) -> Seller:
        """Insert a seller."""

    def update_seller(self, seller: Seller) -> Seller:
        """Overwrite a seller."""

    def delete_seller(self, seller_id: str) -> None:
        """Delete a seller."""

    def set_default(self, seller_id: str) -> None:
        """Mark one seller as default, clearing the flag on the others."""


__all__ = [
    "ProductRepositoryPort",
    "ClientRepositoryPort",
    "SellerRepositoryPort",
]
