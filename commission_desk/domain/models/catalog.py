"""Domain models for catalog records: products, clients and sellers."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    """Commission category with its own percentage.

    Attributes:
        id: Opaque identifier.
        name: Display name, also used as the snapshot key inside invoices.
        percentage: Commission percentage between 0 and 100.
        color: Hex colour used by charts.
        is_default: Whether the product ships with the default catalog.
    """

    id: str
    name: str
    percentage: Decimal
    color: str
    is_default: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class Client:
    """Customer referenced by invoices."""

    id: str
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Seller:
    """Sales representative shown on reports; never used for commissions."""

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    is_default: bool = False
    created_at: datetime | None = None

    @property
    def first_name(self) -> str:
        """Return the first word of the seller name."""
        parts = self.name.split()
        return parts[0] if parts else self.name


__all__ = ["Product", "Client", "Seller"]
