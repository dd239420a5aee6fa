from .invoice_input import (
    InvoiceInput,
    InvoiceLineInput,
    parse_percentage,
    validate_percentage,
)
from .month import Month
from .ncf import build_ncf, next_ncf_suffix, ncf_suffix_number

__all__ = [
    "InvoiceInput",
    "InvoiceLineInput",
    "Month",
    "build_ncf",
    "next_ncf_suffix",
    "ncf_suffix_number",
    "parse_percentage",
    "validate_percentage",
]
