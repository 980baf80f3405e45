"""Use cases wired for the Streamlit UI."""

from dataclasses import dataclass

from commission_desk.application.use_cases import (
    BulkUpdateProductPercentageUseCase,
    CalculateCommissionUseCase,
    DeleteAllDataUseCase,
    DeleteInvoiceUseCase,
    ExportBackupUseCase,
    ExportReportUseCase,
    GetAnnualStatisticsUseCase,
    GetAvailablePeriodsUseCase,
    GetMonthlyBreakdownUseCase,
    GetMonthlyStatisticsUseCase,
    ImportBackupUseCase,
    ImportClientsCsvUseCase,
    ListInvoicesUseCase,
    ManageClientsUseCase,
    ManageProductsUseCase,
    ManageSellersUseCase,
    ManageSettingsUseCase,
    SaveInvoiceUseCase,
    UpdateInvoiceUseCase,
)
from commission_desk.domain.errors import (
    BackupFormatError,
    NotFoundError,
    RepositoryError,
    ValidationError,
)
from commission_desk.infrastructure.container import (
    build_backup_repository,
    build_client_repository,
    build_database_adapter,
    build_invoice_repository,
    build_product_repository,
    build_report_renderer,
    build_seller_repository,
    build_settings,
    build_settings_repository,
)
from commission_desk.infrastructure.logging.logger import get_app_logger
from commission_desk.infrastructure.schema import create_schema, seed_defaults
from commission_desk.infrastructure.settings import AppSettings


USER_ERRORS = (
    ValidationError,
    NotFoundError,
    RepositoryError,
    BackupFormatError,
)


@dataclass(frozen=True)
class AppServices:
    """Every use case the pages call, sharing one database adapter."""

    calculate: CalculateCommissionUseCase
    save_invoice: SaveInvoiceUseCase
    update_invoice: UpdateInvoiceUseCase
    delete_invoice: DeleteInvoiceUseCase
    list_invoices: ListInvoicesUseCase
    products: ManageProductsUseCase
    clients: ManageClientsUseCase
    sellers: ManageSellersUseCase
    settings: ManageSettingsUseCase
    import_clients: ImportClientsCsvUseCase
    export_backup: ExportBackupUseCase
    import_backup: ImportBackupUseCase
    delete_all: DeleteAllDataUseCase
    monthly_statistics: GetMonthlyStatisticsUseCase
    annual_statistics: GetAnnualStatisticsUseCase
    monthly_breakdown: GetMonthlyBreakdownUseCase
    periods: GetAvailablePeriodsUseCase
    bulk_update: BulkUpdateProductPercentageUseCase
    reports: ExportReportUseCase


def build_services(settings: AppSettings | None = None) -> AppServices:
    """Create the schema if needed and wire every use case.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        AppServices: Use cases bound to the configured database.
    """
    resolved = settings or build_settings()
    logger = get_app_logger()
    db_port = build_database_adapter(resolved)
    engine = db_port.get_engine()
    create_schema(engine)
    seed_defaults(engine)

    invoices = build_invoice_repository(db_port, resolved)
    products = build_product_repository(db_port, resolved)
    clients = build_client_repository(db_port, resolved)
    sellers = build_seller_repository(db_port, resolved)
    settings_repo = build_settings_repository(db_port, resolved)
    backups = build_backup_repository(db_port, resolved)

    return AppServices(
        calculate=CalculateCommissionUseCase(products, settings_repo, logger),
        save_invoice=SaveInvoiceUseCase(
            invoices,
            products,
            settings_repo,
            logger=logger,
        ),
        update_invoice=UpdateInvoiceUseCase(invoices, logger=logger),
        delete_invoice=DeleteInvoiceUseCase(invoices, logger=logger),
        list_invoices=ListInvoicesUseCase(invoices, logger=logger),
        products=ManageProductsUseCase(products, logger=logger),
        clients=ManageClientsUseCase(clients, logger=logger),
        sellers=ManageSellersUseCase(sellers, logger=logger),
        settings=ManageSettingsUseCase(settings_repo, logger=logger),
        import_clients=ImportClientsCsvUseCase(clients, logger=logger),
        export_backup=ExportBackupUseCase(backups, logger=logger),
        import_backup=ImportBackupUseCase(backups, logger=logger),
        delete_all=DeleteAllDataUseCase(invoices, clients, logger=logger),
        monthly_statistics=GetMonthlyStatisticsUseCase(
            invoices,
            clients,
            logger=logger,
        ),
        annual_statistics=GetAnnualStatisticsUseCase(invoices, logger=logger),
        monthly_breakdown=GetMonthlyBreakdownUseCase(
            invoices,
            clients,
            logger=logger,
        ),
        periods=GetAvailablePeriodsUseCase(invoices, logger=logger),
        bulk_update=BulkUpdateProductPercentageUseCase(invoices, logger=logger),
        reports=ExportReportUseCase(
            invoices,
            clients,
            sellers,
            build_report_renderer(),
            reports_dir=resolved.reports_dir,
            logger=logger,
        ),
    )


__all__ = ["USER_ERRORS", "AppServices", "build_services"]
