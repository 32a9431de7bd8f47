"""
CashPayment: the whole capex settled at signature (Pix, debit or credit card).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from core.config import ProjectionConfig
from core.schema import PaymentCondition, PaymentMode
from core.utils import percent_to_fraction

from .base import PaymentPlan, PaymentSchedule

_MODES = {m.value: m for m in PaymentMode}


def coerce_mode(mode: Union[PaymentMode, str, None]) -> PaymentMode:
    """Unknown or missing modes settle as PIX."""
    if isinstance(mode, PaymentMode):
        return mode
    return _MODES.get(str(mode or "").strip().upper(), PaymentMode.PIX)


@dataclass(frozen=True)
class CashPayment(PaymentPlan):
    """
    Single charge at month 0 of capex * (1 + MDR), the MDR being the
    merchant-discount-rate of the chosen settlement mode.
    """

    mode: Union[PaymentMode, str, None] = PaymentMode.PIX
    pix_mdr_pct: Optional[float] = 0.0
    debit_mdr_pct: Optional[float] = 0.0
    credit_mdr_pct: Optional[float] = 0.0

    roi_on_outlay = True

    @property
    def condition(self) -> PaymentCondition:
        return PaymentCondition.CASH

    @property
    def mdr_fraction(self) -> float:
        mode = coerce_mode(self.mode)
        if mode is PaymentMode.DEBIT:
            return percent_to_fraction(self.debit_mdr_pct)
        if mode is PaymentMode.CREDIT:
            return percent_to_fraction(self.credit_mdr_pct)
        return percent_to_fraction(self.pix_mdr_pct)

    def schedule(self, capex: float, config: ProjectionConfig) -> PaymentSchedule:
        return PaymentSchedule(upfront=capex * (1.0 + self.mdr_fraction))
