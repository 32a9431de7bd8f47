"""
Input preparation — invoice text extraction and pre-computation validation.
"""

from .invoice_parser import (
    extract_reference_month,
    find_number_after,
    normalize_invoice_text,
    parse_energy_invoice,
)
from .validators import ValidationResult, validate_reading, validate_sale_parameters, validate_terms

__all__ = [
    "extract_reference_month",
    "find_number_after",
    "normalize_invoice_text",
    "parse_energy_invoice",
    "ValidationResult",
    "validate_reading",
    "validate_sale_parameters",
    "validate_terms",
]
