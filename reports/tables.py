"""
Tabular views of engine outputs for the presentation layer.

bill_to_frame and projection_to_frame are one row per item / month.
yearly_summary rolls a projection up to projection years, which is what the
proposal charts show (economy vs payments per year, ROI reached by year N).
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import numpy as np
import pandas as pd

from billing.models import Bill
from core.utils import month_starts
from engine.models import Projection
from formatting.numbers import format_money


def bill_to_frame(bill: Bill) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "code": i.code.value,
                "description": i.description,
                "value": i.value,
                "value_brl": format_money(i.value),
                "included": i.included,
            }
            for i in bill.items
        ],
        columns=["code", "description", "value", "value_brl", "included"],
    )


def projection_to_frame(projection: Projection, start: Optional[date] = None) -> pd.DataFrame:
    """
    One row per projection month (0..horizon).

    If `start` is given, a month-start `date` column is added with month 0
    falling in the month of `start`.
    """
    df = pd.DataFrame({
        "month": np.arange(projection.horizon + 1),
        "economy": projection.economy,
        "payment": projection.payment,
        "flow": projection.flow,
        "balance": projection.balance,
    })
    if start is not None:
        df.insert(1, "date", pd.to_datetime(month_starts(start, projection.horizon)))
    return df


def yearly_summary(projection: Projection) -> pd.DataFrame:
    """
    Aggregate monthly series into projection years.

    Month 0 (purchase) is counted in year 1. Returns columns:
        year, economy, payment, flow, closing_balance, cumulative_roi
    where cumulative_roi = (cum economy - cum payments) / cum payments.
    """
    df = projection_to_frame(projection)
    if projection.horizon == 0:
        df["year"] = 1
    else:
        df["year"] = np.maximum((df["month"] - 1) // 12 + 1, 1)

    yearly = (
        df.groupby("year", as_index=False)
        .agg(
            economy=("economy", "sum"),
            payment=("payment", "sum"),
            flow=("flow", "sum"),
            closing_balance=("balance", "last"),
        )
        .sort_values("year")
        .reset_index(drop=True)
    )

    cum_economy = yearly["economy"].cumsum()
    cum_payment = yearly["payment"].cumsum()
    yearly["cumulative_roi"] = np.where(
        cum_payment > 0,
        (cum_economy - cum_payment) / cum_payment.where(cum_payment > 0, 1.0),
        0.0,
    )
    return yearly
