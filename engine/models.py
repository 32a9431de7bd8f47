"""
Projection inputs and outputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from payments.base import PaymentPlan
from payments.cash import CashPayment


@dataclass(frozen=True)
class SaleParameters:
    """
    Technical and financial parameters of one solar-purchase proposal.

    Every number is coerced by the projector (non-finite -> 0, negatives
    clamped), so partially filled forms can be projected as they are.
    """

    consumption_kwh: Optional[float] = None
    full_tariff: Optional[float] = None            # R$/kWh
    annual_inflation_pct: Optional[float] = None   # energy price growth, % a.a.
    minimum_charge: Optional[float] = None         # R$/month still billed by the utility
    horizon_months: Optional[int] = None
    capex: Optional[float] = None
    payment: PaymentPlan = field(default_factory=CashPayment)
    discount_rate_pct: Optional[float] = None      # % a.a.; NPV only when given

    generation_kwh: Optional[float] = None         # replaces consumption when > 0
    apply_minimum_charge: bool = True


@dataclass(frozen=True, eq=False)
class Projection:
    """
    Monthly series of length horizon+1, index 0 being the purchase month.

    flow = economy - payment, balance = cumsum(flow).
    """

    economy: np.ndarray
    payment: np.ndarray
    flow: np.ndarray
    balance: np.ndarray
    payback: Optional[int]
    roi: float
    npv: Optional[float] = None
    initial_outlay: float = 0.0
    total_payments: float = 0.0

    _SERIES = ("economy", "payment", "flow", "balance")
    _SCALARS = ("payback", "roi", "npv", "initial_outlay", "total_payments")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Projection):
            return NotImplemented
        return all(getattr(self, n) == getattr(other, n) for n in self._SCALARS) and all(
            np.array_equal(getattr(self, n), getattr(other, n)) for n in self._SERIES
        )

    __hash__ = None  # ndarray fields

    @property
    def horizon(self) -> int:
        return len(self.balance) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "economy": self.economy.tolist(),
            "payment": self.payment.tolist(),
            "flow": self.flow.tolist(),
            "balance": self.balance.tolist(),
            "payback": self.payback,
            "roi": self.roi,
            "npv": self.npv,
            "initial_outlay": self.initial_outlay,
            "total_payments": self.total_payments,
        }
