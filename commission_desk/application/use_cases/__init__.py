"""Application use cases package."""

from .backup import ExportBackupUseCase, ImportBackupResult, ImportBackupUseCase
from .calculate_commission import CalculateCommissionUseCase
from .delete_all_data import DeleteAllDataUseCase
from .export_report import ExportReportUseCase
from .import_clients import ImportClientsCsvUseCase
from .invoices import (
    DeleteInvoiceUseCase,
    ListInvoicesUseCase,
    SaveInvoiceUseCase,
    UpdateInvoiceUseCase,
)
from .manage_catalog import (
    ManageClientsUseCase,
    ManageProductsUseCase,
    ManageSellersUseCase,
)
from .manage_settings import ManageSettingsUseCase
from .statistics import (
    BulkUpdateProductPercentageUseCase,
    GetAnnualStatisticsUseCase,
    GetAvailablePeriodsUseCase,
    GetMonthlyBreakdownUseCase,
    GetMonthlyStatisticsUseCase,
)

__all__ = [
    "ExportBackupUseCase",
    "ImportBackupResult",
    "ImportBackupUseCase",
    "CalculateCommissionUseCase",
    "DeleteAllDataUseCase",
    "ExportReportUseCase",
    "ImportClientsCsvUseCase",
    "DeleteInvoiceUseCase",
    "ListInvoicesUseCase",
    "SaveInvoiceUseCase",
    "UpdateInvoiceUseCase",
    "ManageClientsUseCase",
    "ManageProductsUseCase",
    "ManageSellersUseCase",
    "ManageSettingsUseCase",
    "BulkUpdateProductPercentageUseCase",
    "GetAnnualStatisticsUseCase",
    "GetAvailablePeriodsUseCase",
    "GetMonthlyBreakdownUseCase",
    "GetMonthlyStatisticsUseCase",
]
