"""
Build a RawInvoiceReading from OCR text of an energy invoice.

Extraction is label-anchored: each numeric field is the first number that
follows one of its labels (see core.schema.INVOICE_LABELS). Text is collapsed
to single spaces and upper-cased first, so labels match across line breaks.
Fields that are not found stay None; the reconciler decides their defaults.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

from core.schema import BRAZILIAN_STATES, INVOICE_LABELS, KNOWN_DISTRIBUTORS
from billing.models import RawInvoiceReading
from formatting.numbers import parse_locale_number

logger = logging.getLogger(__name__)

_MONTH_NUMBERS: Dict[str, str] = {
    "JAN": "01", "FEV": "02", "MAR": "03", "ABR": "04", "MAI": "05", "JUN": "06",
    "JUL": "07", "AGO": "08", "SET": "09", "OUT": "10", "NOV": "11", "DEZ": "12",
}

_MONTH_ABBREVIATED = re.compile(r"(JAN|FEV|MAR|ABR|MAI|JUN|JUL|AGO|SET|OUT|NOV|DEZ)[/\-]?\s?(20\d{2})")
_MONTH_NUMERIC = re.compile(r"(0?[1-9]|1[0-2])[/\\\-](20\d{2})")
_DISTRIBUTOR = re.compile("|".join(re.escape(d) for d in KNOWN_DISTRIBUTORS))
_STATE = re.compile(r"\b(" + "|".join(BRAZILIAN_STATES) + r")\b")


def normalize_invoice_text(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip().upper()


def extract_reference_month(text: str) -> Optional[str]:
    """
    "JAN/2024", "jan 2024" or "01/2024" -> "2024-01".

    Portuguese month abbreviations are tried before the numeric MM/YYYY form.
    """
    upper = text.upper()
    m = _MONTH_ABBREVIATED.search(upper)
    if m:
        return f"{m.group(2)}-{_MONTH_NUMBERS[m.group(1)]}"
    m = _MONTH_NUMERIC.search(upper)
    if m:
        return f"{m.group(2)}-{m.group(1).zfill(2)}"
    return None


def find_number_after(label: str, text: str) -> Optional[float]:
    """First pt-BR number after `label` (a regex alternation), or None."""
    m = re.search(rf"(?:{label})[^0-9]*([0-9.,]+)", text, re.IGNORECASE)
    if not m:
        return None
    return parse_locale_number(m.group(1))


def parse_energy_invoice(ocr_text: str) -> RawInvoiceReading:
    """
    Extract the billing-relevant fields from one invoice's OCR text.

    Returns a RawInvoiceReading; consumption may be None, in which case the
    reconciler will refuse the reading.
    """
    text = normalize_invoice_text(ocr_text)

    values = {field: find_number_after(label, text) for field, label in INVOICE_LABELS.items()}

    distributor = _DISTRIBUTOR.search(text)
    state = _STATE.search(text)

    found = sum(v is not None for v in values.values())
    logger.debug("Invoice parser found %d/%d numeric fields", found, len(values))
    if values["consumption_kwh"] is None:
        logger.warning("No consumption found in invoice text")

    return RawInvoiceReading(
        reference_month=extract_reference_month(text),
        distributor=distributor.group(0) if distributor else None,
        state=state.group(1) if state else None,
        **values,
    )
