from __future__ import annotations

import math
import numbers
from datetime import date
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, List, Optional

from dateutil.relativedelta import relativedelta

# wide enough to quantize any finite float exactly
_EXACT = Context(prec=400)


def coerce_number(value: Any, default: Optional[float] = 0.0) -> Optional[float]:
    """Return `value` as a float when it is a finite real number, else `default`."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return default
    value = float(value)
    if not math.isfinite(value):
        return default
    return value


def coerce_non_negative(value: Any, default: float = 0.0) -> float:
    return max(coerce_number(value, default), 0.0)


def coerce_count(value: Any, default: int = 0) -> int:
    """Floor of a coerced number, never negative. Missing values take `default`."""
    number = coerce_number(value, None)
    if number is None:
        return max(int(default), 0)
    return max(int(math.floor(number)), 0)


def annual_to_monthly_rate(annual_pct: Any) -> float:
    """
    Convert an annual percentage into the equivalent compounded monthly rate
    via (1 + p/100)^(1/12) - 1.

    Shared by inflation, card/financing interest and the NPV discount rate.
    Non-finite input and annual rates at or below -100% yield 0.
    """
    pct = coerce_number(annual_pct, None)
    if pct is None:
        return 0.0
    annual = pct / 100.0
    if annual <= -1.0:
        return 0.0
    return (1.0 + annual) ** (1.0 / 12.0) - 1.0


def percent_to_fraction(value: Any) -> float:
    return coerce_number(value, 0.0) / 100.0


def to_fixed(value: float, decimals: int = 2) -> str:
    """
    Fixed-point text of the exact binary value of `value`, ties away from zero.

    1.115 is stored as 1.11499999..., so it gives "1.11". Zero never carries a sign.
    """
    exponent = Decimal(1).scaleb(-decimals)
    q = Decimal(float(value)).quantize(exponent, rounding=ROUND_HALF_UP, context=_EXACT)
    if q.is_zero():
        q = q.copy_abs()
    return str(q)


def round_money(value: float) -> float:
    """Two-decimal rounding of the exact binary value, as a plain float."""
    return float(to_fixed(value, 2))


def plain_number(value: float) -> str:
    """Shortest round-tripping text of a number; integral values without ".0"."""
    number = float(value)
    if number.is_integer() and abs(number) < 1e21:
        return str(int(number))
    return repr(number)


def month_starts(start: date, n_months: int) -> List[date]:
    """Month-start dates for projection months 0..n_months, month 0 being `start`'s month."""
    base = date(start.year, start.month, 1)
    return [base + relativedelta(months=k) for k in range(n_months + 1)]


def level_payment(balance: float, monthly_rate: float, n_months: int, *, tolerance: float = 1e-9) -> float:
    """
    Standard fully-amortizing level payment (PMT) with near-zero rate guard.

    PMT = pv * r * (1+r)^n / ((1+r)^n - 1); pv / n when |r| is below
    `tolerance`; 0 when there are no periods.
    """
    if n_months <= 0:
        return 0.0
    if abs(monthly_rate) < tolerance:
        return float(balance) / n_months
    try:
        factor = (1 + monthly_rate) ** n_months
    except OverflowError:
        # r * f / (f - 1) tends to r as f grows
        return float(balance) * monthly_rate
    if factor == 1:
        return float(balance) / n_months
    return float(balance) * (monthly_rate * factor) / (factor - 1)
