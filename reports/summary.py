"""
The handful of numbers and warnings a salesperson reads off a projection
before sending the proposal to the client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np
import pandas as pd

from core.config import ProjectionConfig
from core.schema import PAYMENT_CONDITION_LABELS, PAYMENT_MODE_LABELS
from core.utils import coerce_non_negative
from engine.models import Projection, SaleParameters
from formatting.numbers import format_locale_number, format_money, format_percent
from payments.base import PaymentPlan
from payments.cash import CashPayment, coerce_mode


@dataclass
class ProposalSummary:
    """Structured proposal output."""
    payment_label: str
    capex: float
    horizon_months: int

    total_economy: float
    total_payments: float
    initial_outlay: float

    payback_months: Optional[int]
    roi: float
    npv: Optional[float]

    flags: List[str] = field(default_factory=list)

    @property
    def payback_years(self) -> Optional[float]:
        return self.payback_months / 12.0 if self.payback_months is not None else None

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table (pt-BR formatted values)."""
        payback = (
            f"{self.payback_months} ({format_locale_number(self.payback_years, 1)} anos)"
            if self.payback_months is not None else "Não atingido"
        )
        rows = [
            {"Metric": "Condição de pagamento", "Value": self.payment_label, "Unit": ""},
            {"Metric": "Investimento (capex)", "Value": format_money(self.capex), "Unit": ""},
            {"Metric": "Horizonte", "Value": str(self.horizon_months), "Unit": "meses"},
            {"Metric": "Desembolso inicial", "Value": format_money(self.initial_outlay), "Unit": ""},
            {"Metric": "Total de pagamentos", "Value": format_money(self.total_payments), "Unit": ""},
            {"Metric": "Economia total", "Value": format_money(self.total_economy), "Unit": ""},
            {"Metric": "Payback", "Value": payback, "Unit": "meses"},
            {"Metric": "ROI", "Value": format_percent(self.roi), "Unit": ""},
        ]
        if self.npv is not None:
            rows.append({"Metric": "VPL", "Value": format_money(self.npv), "Unit": ""})
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags), "Unit": ""})
        return pd.DataFrame(rows)


def payment_label(plan: PaymentPlan) -> str:
    if isinstance(plan, CashPayment):
        return PAYMENT_MODE_LABELS[coerce_mode(plan.mode)]
    return PAYMENT_CONDITION_LABELS.get(plan.condition, plan.condition.value)


def generate_proposal_summary(
    projection: Projection,
    params: SaleParameters,
    config: Optional[ProjectionConfig] = None,
) -> ProposalSummary:
    """
    Summarize a projection produced from `params`.

    Flags raised:
      NO_PAYBACK               balance never turns non-negative within the horizon
      NEGATIVE_ROI             economy does not cover what the client pays
      NEGATIVE_NPV             discounted flows are negative
      PAYMENTS_BEYOND_HORIZON  installments continue after the last projected month
    """
    plan = params.payment if isinstance(params.payment, PaymentPlan) else CashPayment()

    flags = []
    if projection.payback is None:
        flags.append("NO_PAYBACK: balance stays negative within the horizon")
    if projection.roi < 0:
        flags.append(f"NEGATIVE_ROI: {format_percent(projection.roi)}")
    if projection.npv is not None and projection.npv < 0:
        flags.append(f"NEGATIVE_NPV: {format_money(projection.npv)}")

    capex = coerce_non_negative(params.capex)
    schedule = plan.schedule(capex, config if config is not None else ProjectionConfig())
    if schedule.count > projection.horizon:
        flags.append(
            f"PAYMENTS_BEYOND_HORIZON: {schedule.count} installments, "
            f"{projection.horizon} months projected"
        )

    return ProposalSummary(
        payment_label=payment_label(plan),
        capex=capex,
        horizon_months=projection.horizon,
        total_economy=float(np.sum(projection.economy)),
        total_payments=projection.total_payments,
        initial_outlay=projection.initial_outlay,
        payback_months=projection.payback,
        roi=projection.roi,
        npv=projection.npv,
        flags=flags,
    )
