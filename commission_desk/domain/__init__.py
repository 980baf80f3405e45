"""Domain package for commission rules and core models."""

from .constants import (
    DEFAULT_REST_PERCENTAGE,
    NCF_PREFIX,
    REST_LABEL,
)
from .errors import (
    BackupFormatError,
    BulkUpdateError,
    DuplicateNcfError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from .models import (
    Client,
    CommissionBreakdown,
    Invoice,
    InvoiceLine,
    Product,
    Seller,
)

__all__ = [
    "DEFAULT_REST_PERCENTAGE",
    "NCF_PREFIX",
    "REST_LABEL",
    "BackupFormatError",
    "BulkUpdateError",
    "DuplicateNcfError",
    "NotFoundError",
    "RepositoryError",
    "ValidationError",
    "Client",
    "CommissionBreakdown",
    "Invoice",
    "InvoiceLine",
    "Product",
    "Seller",
]
