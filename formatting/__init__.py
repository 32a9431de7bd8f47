"""
Locale-aware (pt-BR) number parsing and formatting.
"""

from .numbers import (
    format_kwh,
    format_locale_number,
    format_money,
    format_percent,
    format_quantity,
    parse_locale_number,
    to_number_flexible,
)

__all__ = [
    "format_kwh",
    "format_locale_number",
    "format_money",
    "format_percent",
    "format_quantity",
    "parse_locale_number",
    "to_number_flexible",
]
