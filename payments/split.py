"""
SplitPayment: capex divided into equal interest-free charges, collected by
bank slip (boleto) or automatic debit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from core.config import ProjectionConfig
from core.schema import PaymentCondition
from core.utils import coerce_count

from .base import PaymentPlan, PaymentSchedule


@dataclass(frozen=True)
class SplitPayment(PaymentPlan):
    kind: PaymentCondition = PaymentCondition.BOLETO
    installments: Optional[int] = None

    @property
    def condition(self) -> PaymentCondition:
        return self.kind

    def schedule(self, capex: float, config: ProjectionConfig) -> PaymentSchedule:
        n = coerce_count(self.installments, config.default_split_installments)
        amount = capex / n if n > 0 else 0.0
        return PaymentSchedule(upfront=0.0, amount=amount, count=n)
