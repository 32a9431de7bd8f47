"""
Engine configuration.

Environment-provided defaults are read once through pydantic-settings; the
engines themselves only ever see the frozen dataclasses built from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Regional defaults loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    BILLING_DEFAULT_UF: str = "GO"
    BILLING_DEFAULT_DISTRIBUIDORA: str = "EQUATORIAL GO"
    BILLING_DEFAULT_TARIFF: float = 0.98
    BILLING_ENGINE_VERSION: str = "ENGINE-v1"


@dataclass(frozen=True)
class BillingConfig:
    default_state: str = "GO"
    default_distributor: str = "EQUATORIAL GO"
    default_full_tariff: float = 0.98  # R$/kWh when the invoice omits it
    engine_version: str = "ENGINE-v1"
    missing_reference_month: str = "N/D"

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "BillingConfig":
        s = settings if settings is not None else Settings()
        return cls(
            default_state=s.BILLING_DEFAULT_UF,
            default_distributor=s.BILLING_DEFAULT_DISTRIBUIDORA,
            default_full_tariff=float(s.BILLING_DEFAULT_TARIFF),
            engine_version=s.BILLING_ENGINE_VERSION,
        )


@dataclass(frozen=True)
class ProjectionConfig:
    # installment counts used when a plan leaves them out
    default_card_installments: int = 12
    default_financing_installments: int = 60
    default_split_installments: int = 12

    # below this the annuity degrades to pv / n
    zero_rate_tolerance: float = 1e-9
