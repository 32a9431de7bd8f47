"""
Brazilian number conventions: '.' groups thousands and ',' marks decimals.

parse_locale_number / format_locale_number are strict inverses for values with
at most `decimals` fractional digits; the remaining helpers are display-side
conveniences built on top of them.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from core.utils import coerce_number

EMPTY_PLACEHOLDER = "—"

_PLAIN_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")
_LEADING_NUMBER = re.compile(r"-?(\d+(\.\d*)?|\.\d+)")
_COMMA_DECIMAL = re.compile(r",\d+$")
_SWAP_SEPARATORS = str.maketrans(",.", ".,")


def _is_real(value: Any) -> bool:
    return not isinstance(value, (str, bytes)) and coerce_number(value, None) is not None


def parse_locale_number(text: Any) -> Optional[float]:
    """
    Parse "1.234,56" -> 1234.56. Never raises.

    Thousands dots are dropped and the decimal comma becomes a point before
    parsing. Empty, non-numeric or non-finite input returns None.
    """
    if text is None:
        return None
    if _is_real(text):
        return coerce_number(text, None)
    if not isinstance(text, str):
        return None

    cleaned = text.replace("\u00a0", "").replace(" ", "").strip()
    if not cleaned:
        return None
    cleaned = cleaned.replace(".", "").replace(",", ".")
    if not _PLAIN_NUMBER.match(cleaned):
        return None
    return coerce_number(float(cleaned), None)


def format_locale_number(value: Any, decimals: int = 2) -> str:
    """Format 1234.5 -> "1.234,50". Non-numeric input gives the placeholder dash."""
    number = coerce_number(value, None)
    if number is None:
        return EMPTY_PLACEHOLDER
    decimals = max(int(decimals), 0)
    return f"{number:,.{decimals}f}".translate(_SWAP_SEPARATORS)


def to_number_flexible(value: Any) -> Optional[float]:
    """Accept both "1.234,56" and "1234.56" (and plain numbers); None if unusable."""
    if value is None:
        return None
    if _is_real(value):
        return coerce_number(value, None)
    if not isinstance(value, str):
        return None

    text = value.replace("\u00a0", " ").strip()
    if not text:
        return None
    if _COMMA_DECIMAL.search(text):
        text = text.replace(".", "").replace(",", ".")
    text = re.sub(r"[^\d.\-]", "", text)
    m = _LEADING_NUMBER.match(text)
    if not m:
        return None
    return coerce_number(float(m.group(0)), None)


def format_quantity(value: Any, max_decimals: int = 2) -> str:
    """Like format_locale_number but without trailing zero decimals ("2.000", "12,5")."""
    number = coerce_number(value, None)
    if number is None:
        return EMPTY_PLACEHOLDER
    text = format_locale_number(number, max_decimals)
    if "," in text:
        text = text.rstrip("0").rstrip(",")
    return text


def format_money(value: Any, decimals: int = 2) -> str:
    """1234.5 -> "R$ 1.234,50"; negatives as "-R$ 10,00"."""
    number = coerce_number(value, None)
    if number is None:
        return EMPTY_PLACEHOLDER
    body = format_locale_number(abs(number), decimals)
    sign = "-" if number < 0 and body.strip("0,.") else ""
    return f"{sign}R$ {body}"


def format_percent(fraction: Any, decimals: int = 2) -> str:
    """0.105 -> "10,50%"."""
    number = coerce_number(fraction, None)
    if number is None:
        return EMPTY_PLACEHOLDER
    return f"{format_locale_number(number * 100.0, decimals)}%"


def format_kwh(value: Any, unit: str = "kWh/mês") -> str:
    number = coerce_number(value, None)
    if number is None:
        return EMPTY_PLACEHOLDER
    return f"{format_quantity(number)} {unit}"
