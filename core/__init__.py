"""
Core package — schema definitions, configuration, errors and shared numeric helpers.
No business logic lives here.
"""

from .schema import LineCode, PaymentCondition, PaymentMode
from .config import BillingConfig, ProjectionConfig, Settings
from .errors import MissingConsumptionError
from .utils import (
    annual_to_monthly_rate,
    coerce_count,
    coerce_non_negative,
    coerce_number,
    level_payment,
    plain_number,
    round_money,
    to_fixed,
)

__all__ = [
    "LineCode",
    "PaymentCondition",
    "PaymentMode",
    "BillingConfig",
    "ProjectionConfig",
    "Settings",
    "MissingConsumptionError",
    "annual_to_monthly_rate",
    "coerce_count",
    "coerce_non_negative",
    "coerce_number",
    "level_payment",
    "plain_number",
    "round_money",
    "to_fixed",
]
