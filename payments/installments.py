"""
Amortized plans: card installments and bank financing.

Both charge a level payment (PMT) in months 1..n. They differ in what is
amortized: installments spread the whole capex and add the card MDR on top of
each payment; financing takes an optional down payment at month 0 and
amortizes only the remaining principal.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from core.config import ProjectionConfig
from core.schema import PaymentCondition
from core.utils import coerce_count, coerce_non_negative, level_payment, percent_to_fraction

from .base import PaymentPlan, PaymentSchedule, resolve_monthly_rate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallmentPayment(PaymentPlan):
    installments: Optional[int] = None
    monthly_rate_pct: Optional[float] = None
    annual_rate_pct: Optional[float] = None
    mdr_pct: Optional[float] = 0.0

    @property
    def condition(self) -> PaymentCondition:
        return PaymentCondition.INSTALLMENTS

    def schedule(self, capex: float, config: ProjectionConfig) -> PaymentSchedule:
        n = coerce_count(self.installments, config.default_card_installments)
        rate = resolve_monthly_rate(self.monthly_rate_pct, self.annual_rate_pct)
        base = level_payment(capex, rate, n, tolerance=config.zero_rate_tolerance)
        amount = base * (1.0 + percent_to_fraction(self.mdr_pct))
        logger.debug("Card installments: n=%d rate=%.6f amount=%.2f", n, rate, amount)
        return PaymentSchedule(upfront=0.0, amount=amount, count=n)


@dataclass(frozen=True)
class FinancingPayment(PaymentPlan):
    installments: Optional[int] = None
    down_payment: Optional[float] = 0.0
    monthly_rate_pct: Optional[float] = None
    annual_rate_pct: Optional[float] = None

    @property
    def condition(self) -> PaymentCondition:
        return PaymentCondition.FINANCING

    def schedule(self, capex: float, config: ProjectionConfig) -> PaymentSchedule:
        n = coerce_count(self.installments, config.default_financing_installments)
        down = coerce_non_negative(self.down_payment)
        principal = max(capex - down, 0.0)
        rate = resolve_monthly_rate(self.monthly_rate_pct, self.annual_rate_pct)
        amount = level_payment(principal, rate, n, tolerance=config.zero_rate_tolerance)
        logger.debug(
            "Financing: down=%.2f principal=%.2f n=%d rate=%.6f amount=%.2f",
            down, principal, n, rate, amount,
        )
        return PaymentSchedule(upfront=down, amount=amount, count=n)
