"""Application ports package."""

from .backup import BackupRepositoryPort, Snapshot
from .catalog_repository import (
    ClientRepositoryPort,
    ProductRepositoryPort,
    SellerRepositoryPort,
)
from .database import DatabaseEnginePort
from .invoice_repository import InvoiceRepositoryPort
from .reports import ReportRendererPort
from .settings_repository import SettingsRepositoryPort

__all__ = [
    "BackupRepositoryPort",
    "Snapshot",
    "ClientRepositoryPort",
    "ProductRepositoryPort",
    "SellerRepositoryPort",
    "DatabaseEnginePort",
    "InvoiceRepositoryPort",
    "ReportRendererPort",
    "SettingsRepositoryPort",
]
