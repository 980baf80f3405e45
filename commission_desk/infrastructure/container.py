"""Composition root for wiring infrastructure adapters."""

from commission_desk.application.ports.backup import BackupRepositoryPort
from commission_desk.application.ports.catalog_repository import (
    ClientRepositoryPort,
    ProductRepositoryPort,
    SellerRepositoryPort,
)
from commission_desk.application.ports.database import DatabaseEnginePort
from commission_desk.application.ports.invoice_repository import (
    InvoiceRepositoryPort,
)
from commission_desk.application.ports.reports import ReportRendererPort
from commission_desk.application.ports.settings_repository import (
    SettingsRepositoryPort,
)
from commission_desk.infrastructure.backup_repository import (
    SqlAlchemyBackupRepository,
)
from commission_desk.infrastructure.catalog_repository import (
    SqlAlchemyClientRepository,
    SqlAlchemyProductRepository,
    SqlAlchemySellerRepository,
)
from commission_desk.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from commission_desk.infrastructure.invoice_repository import (
    SqlAlchemyInvoiceRepository,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.infrastructure.reports.pdf import ReportLabReportRenderer
from commission_desk.infrastructure.settings import AppSettings
from commission_desk.infrastructure.settings_repository import (
    SqlAlchemySettingsRepository,
)


def build_settings() -> AppSettings:
    """Return settings read from the environment."""
    return AppSettings.from_env()


def build_database_adapter(
    settings: AppSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter(settings or build_settings())


def build_invoice_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> InvoiceRepositoryPort:
    """Return the invoice repository."""
    resolved = settings or build_settings()
    return SqlAlchemyInvoiceRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_product_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> ProductRepositoryPort:
    """Return the product catalog repository."""
    resolved = settings or build_settings()
    return SqlAlchemyProductRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_client_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> ClientRepositoryPort:
    """Return the client repository."""
    resolved = settings or build_settings()
    return SqlAlchemyClientRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_seller_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> SellerRepositoryPort:
    """Return the seller repository."""
    resolved = settings or build_settings()
    return SqlAlchemySellerRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_settings_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> SettingsRepositoryPort:
    """Return the key/value settings repository."""
    resolved = settings or build_settings()
    return SqlAlchemySettingsRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_backup_repository(
    db_port: DatabaseEnginePort | None = None,
    settings: AppSettings | None = None,
) -> BackupRepositoryPort:
    """Return the snapshot repository used by backups."""
    resolved = settings or build_settings()
    return SqlAlchemyBackupRepository(
        db_port or build_database_adapter(resolved),
        logger=get_app_logger(),
        attempts=resolved.db_retries,
    )


def build_report_renderer() -> ReportRendererPort:
    """Return the PDF renderer."""
    return ReportLabReportRenderer(logger=get_app_logger())


__all__ = [
    "build_settings",
    "build_database_adapter",
    "build_invoice_repository",
    "build_product_repository",
    "build_client_repository",
    "build_seller_repository",
    "build_settings_repository",
    "build_backup_repository",
    "build_report_renderer",
]
