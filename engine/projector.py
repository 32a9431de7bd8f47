"""
Cash-flow / ROI projector for a solar-purchase proposal.

Given consumption, tariff and the payment plan, builds the monthly economy and
payment series, the net flow and its cumulative balance, then derives payback,
ROI and (when a discount rate is given) NPV.

The projector never raises: every input goes through the coerce helpers first,
and fully missing input degrades to an all-zero projection.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from core.config import ProjectionConfig
from core.utils import (
    annual_to_monthly_rate,
    coerce_count,
    coerce_non_negative,
    coerce_number,
)
from payments.base import PaymentPlan
from payments.cash import CashPayment

from .cashflow import cumulative_balance, discounted_value, economy_series, first_payback
from .models import Projection, SaleParameters

logger = logging.getLogger(__name__)


def _freeze(*arrays: np.ndarray) -> None:
    for a in arrays:
        a.setflags(write=False)


def compute_roi(
    params: SaleParameters,
    *,
    config: Optional[ProjectionConfig] = None,
) -> Projection:
    """
    Project month-by-month economy, payments and balance for one sale.

    Parameters
    ----------
    params : SaleParameters
        Proposal inputs; the payment plan decides the payment series.
    config : ProjectionConfig, optional
        Default installment counts and the zero-rate tolerance.

    Returns
    -------
    Projection with series of length horizon+1 (index 0 = purchase month).
    """
    cfg = config if config is not None else ProjectionConfig()

    horizon = coerce_count(params.horizon_months, 0)

    consumption = coerce_non_negative(params.consumption_kwh)
    generation = coerce_non_negative(params.generation_kwh)
    energy = generation if generation > 0 else consumption
    tariff = coerce_non_negative(params.full_tariff)
    minimum = coerce_non_negative(params.minimum_charge) if params.apply_minimum_charge else 0.0
    capex = coerce_non_negative(params.capex)
    growth = annual_to_monthly_rate(params.annual_inflation_pct)

    plan: PaymentPlan = params.payment if isinstance(params.payment, PaymentPlan) else CashPayment()

    # ========= SERIES =========
    economy = economy_series(energy, tariff, minimum, growth, horizon)
    schedule = plan.schedule(capex, cfg)
    payment = schedule.to_series(horizon)
    flow = economy - payment
    balance = cumulative_balance(flow)

    # ========= METRICS =========
    payback = first_payback(balance)

    total_economy = float(np.sum(economy))
    total_payments = float(np.sum(payment))
    initial_outlay = float(payment[0])

    basis = initial_outlay if plan.roi_on_outlay else total_payments
    roi = (total_economy - basis) / basis if basis > 0 else 0.0

    npv = None
    discount_pct = coerce_number(params.discount_rate_pct, None)
    if discount_pct is not None:
        npv = discounted_value(flow, annual_to_monthly_rate(discount_pct))

    logger.debug(
        "Projection %s: horizon=%d capex=%.2f payback=%s roi=%.4f",
        plan.condition.value, horizon, capex, payback, roi,
    )

    _freeze(economy, payment, flow, balance)
    return Projection(
        economy=economy,
        payment=payment,
        flow=flow,
        balance=balance,
        payback=payback,
        roi=roi,
        npv=npv,
        initial_outlay=initial_outlay,
        total_payments=total_payments,
    )
