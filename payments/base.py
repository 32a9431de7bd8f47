"""
Base classes for payment plans.

A sale is paid under exactly one plan. Each plan variant carries only the
fields its condition needs and turns the capex into a PaymentSchedule.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from core.config import ProjectionConfig
from core.schema import PaymentCondition
from core.utils import annual_to_monthly_rate, coerce_number


@dataclass(frozen=True)
class PaymentSchedule:
    """
    Charges of one plan on the projection calendar.

    upfront is charged at month 0; amount is charged in months 1..count.
    """

    upfront: float = 0.0
    amount: float = 0.0
    count: int = 0

    def to_series(self, horizon: int) -> np.ndarray:
        """Monthly payment series of length horizon+1; charges past the horizon are dropped."""
        series = np.zeros(horizon + 1, dtype=float)
        series[0] = self.upfront
        last = min(self.count, horizon)
        if last > 0:
            series[1:last + 1] = self.amount
        return series


class PaymentPlan:
    """Interface for payment conditions."""

    # CASH measures ROI against the month-0 outlay, the others against total payments
    roi_on_outlay: bool = False

    @property
    def condition(self) -> PaymentCondition:
        raise NotImplementedError

    def schedule(self, capex: float, config: ProjectionConfig) -> PaymentSchedule:
        raise NotImplementedError


def resolve_monthly_rate(monthly_rate_pct: Any, annual_rate_pct: Any) -> float:
    """A monthly percentage wins; otherwise the annual one is compounded down."""
    monthly = coerce_number(monthly_rate_pct, None)
    if monthly is not None:
        return monthly / 100.0
    return annual_to_monthly_rate(annual_rate_pct)
