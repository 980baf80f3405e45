"""Domain services package."""

from .commission import (
    apply_product_percentage,
    commission_for,
    compute_breakdown,
    compute_line,
    recompute_invoice,
)
from .dates import invoice_bucket_date, parse_invoice_date
from .ncf import format_ncf, next_ncf_number, parse_ncf_suffix
from .validation import (
    parse_amount_input,
    validate_amount,
    validate_name,
    validate_percentage,
)

__all__ = [
    "apply_product_percentage",
    "commission_for",
    "compute_breakdown",
    "compute_line",
    "recompute_invoice",
    "invoice_bucket_date",
    "parse_invoice_date",
    "format_ncf",
    "next_ncf_number",
    "parse_ncf_suffix",
    "parse_amount_input",
    "validate_amount",
    "validate_name",
    "validate_percentage",
]
