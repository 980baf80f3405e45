"""Domain constants for commissions and invoices."""

from decimal import Decimal

DEFAULT_REST_PERCENTAGE = Decimal("25")

REST_PERCENTAGE_KEY = "rest_percentage"
LAST_NCF_NUMBER_KEY = "last_ncf_number"

NCF_PREFIX = "B010000"
NCF_SUFFIX_LENGTH = 4

REST_LABEL = "Resto de Productos"
UNKNOWN_CLIENT_LABEL = "Cliente Desconocido"

PRODUCT_COLORS = (
    "#10b981",
    "#f59e0b",
    "#6366f1",
    "#ec4899",
    "#8b5cf6",
    "#14b8a6",
    "#f97316",
    "#06b6d4",
)
FALLBACK_PRODUCT_COLOR = "#6366f1"

BACKUP_VERSION = "1.2"

MONTH_NAMES_ES = (
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
)


__all__ = [
    "DEFAULT_REST_PERCENTAGE",
    "REST_PERCENTAGE_KEY",
    "LAST_NCF_NUMBER_KEY",
    "NCF_PREFIX",
    "NCF_SUFFIX_LENGTH",
    "REST_LABEL",
    "UNKNOWN_CLIENT_LABEL",
    "PRODUCT_COLORS",
    "FALLBACK_PRODUCT_COLOR",
    "BACKUP_VERSION",
    "MONTH_NAMES_ES",
]
