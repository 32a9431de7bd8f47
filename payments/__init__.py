"""
Payment plans — one variant per payment condition, each turning capex into a schedule.
"""

from .base import PaymentPlan, PaymentSchedule, resolve_monthly_rate
from .cash import CashPayment, coerce_mode
from .installments import FinancingPayment, InstallmentPayment
from .split import SplitPayment

__all__ = [
    "PaymentPlan",
    "PaymentSchedule",
    "resolve_monthly_rate",
    "CashPayment",
    "coerce_mode",
    "FinancingPayment",
    "InstallmentPayment",
    "SplitPayment",
]
