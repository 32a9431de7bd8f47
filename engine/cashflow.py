"""
Deterministic monthly cashflow helpers.

Calendar convention:
  - month 0 is the purchase month: no economy, only upfront charges
  - months 1..horizon carry the economy and the installments
  - tariffs grow by compounded monthly inflation from month 1 on
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def economy_series(
    energy_kwh: float,
    tariff: float,
    minimum_charge: float,
    monthly_growth: float,
    horizon: int,
) -> np.ndarray:
    """economy[m] = max(0, energy * tariff * (1+g)^(m-1) - minimum_charge); economy[0] = 0."""
    economy = np.zeros(horizon + 1, dtype=float)
    if horizon <= 0:
        return economy
    months = np.arange(1, horizon + 1, dtype=float)
    tariffs = tariff * np.power(1.0 + monthly_growth, months - 1.0)
    economy[1:] = np.maximum(0.0, energy_kwh * tariffs - minimum_charge)
    return economy


def cumulative_balance(flow: np.ndarray) -> np.ndarray:
    """balance[0] = flow[0]; balance[m] = balance[m-1] + flow[m]."""
    balance = np.zeros_like(flow, dtype=float)
    if len(flow) == 0:
        return balance
    balance[0] = flow[0]
    for m in range(1, len(flow)):
        balance[m] = balance[m - 1] + flow[m]
    return balance


def first_payback(balance: np.ndarray) -> Optional[int]:
    """First month in 1..horizon whose cumulative balance is non-negative."""
    for m in range(1, len(balance)):
        if balance[m] >= 0:
            return m
    return None


def discounted_value(flow: np.ndarray, monthly_rate: float) -> float:
    """Sum of flow[m] / (1+r)^m over months 0..horizon."""
    months = np.arange(len(flow), dtype=float)
    return float(np.sum(flow / np.power(1.0 + monthly_rate, months)))
