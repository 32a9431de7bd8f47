"""
Data quality checks for engine inputs, run before computing.

The engines never raise on these conditions (they coerce); the checks exist
so callers can show the user what will be defaulted or clamped:
- missing invoice fields that fall back to regional defaults
- negative or non-finite numbers that will be clamped to zero
- payment plans whose installments outlast the projection horizon
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import List, Optional

from billing.models import ContractTerms, RawInvoiceReading
from core.config import ProjectionConfig
from core.utils import coerce_number
from engine.models import SaleParameters
from payments.base import PaymentPlan
from payments.cash import CashPayment


@dataclass
class ValidationResult:
    """
    Findings about one invoice or proposal. Errors mean the engines cannot
    produce a usable result; warnings name values they will default or clamp.
    """
    subject: str = "entrada"
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def extend(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self

    def summary(self) -> str:
        """One status line in Portuguese for the operator, then one line per finding."""
        if not self.errors and not self.warnings:
            return f"{self.subject.capitalize()} sem pendências."
        outcome = "cálculo bloqueado" if self.errors else "cálculo segue com ajustes"
        lines = [
            f"{self.subject.capitalize()}: {len(self.errors)} erro(s), "
            f"{len(self.warnings)} aviso(s); {outcome}."
        ]
        lines.extend(f"  ERRO: {e}" for e in self.errors)
        lines.extend(f"  AVISO: {w}" for w in self.warnings)
        return "\n".join(lines)


def _is_negative(value) -> bool:
    number = coerce_number(value, None)
    return number is not None and number < 0


def _is_unusable(value) -> bool:
    """Present but not a finite number."""
    return value is not None and coerce_number(value, None) is None


def validate_reading(
    reading: RawInvoiceReading,
    terms: Optional[ContractTerms] = None,
) -> ValidationResult:
    """
    Check one invoice reading (and optionally its contract) before billing.
    Missing consumption is the only blocking error.
    """
    result = ValidationResult(subject="fatura")

    if coerce_number(reading.consumption_kwh, None) is None:
        result.errors.append("Consumption is missing or not a number; the bill cannot be computed.")

    for f in fields(RawInvoiceReading):
        value = getattr(reading, f.name)
        if f.name == "consumption_kwh" or isinstance(value, str):
            continue
        if _is_unusable(value):
            result.warnings.append(f"{f.name} is not a finite number and will be treated as 0.")
        elif _is_negative(value):
            result.warnings.append(f"{f.name} is negative ({value}).")

    if coerce_number(reading.full_tariff, None) is None:
        result.warnings.append("Full tariff missing; the regional default tariff will be used.")
    if not reading.reference_month:
        result.warnings.append("Reference month missing.")
    if not reading.state or not reading.distributor:
        result.warnings.append("State/distributor missing; regional defaults will be used.")

    if terms is not None:
        result.extend(validate_terms(terms))
    return result


def validate_terms(terms: ContractTerms) -> ValidationResult:
    result = ValidationResult(subject="contrato")
    if coerce_number(terms.contracted_quota_kwh, None) is None:
        result.warnings.append("Contracted quota (Kc) missing; 0 kWh will be billed as quota.")
    discount = coerce_number(terms.discount_fraction, None)
    if discount is not None and not (0.0 <= discount <= 1.0):
        result.warnings.append(
            f"Discount {discount} is outside [0, 1]; check if it is in percent vs fraction form."
        )
    return result


def validate_sale_parameters(
    params: SaleParameters,
    config: Optional[ProjectionConfig] = None,
) -> ValidationResult:
    """
    Check a proposal before projecting it. Errors mark projections that would be
    meaningless (no horizon, no energy); warnings list values that get coerced.
    """
    cfg = config if config is not None else ProjectionConfig()
    result = ValidationResult(subject="proposta")

    horizon = coerce_number(params.horizon_months, None)
    if horizon is None or horizon < 1:
        result.errors.append("Horizon must be at least 1 month.")

    consumption = coerce_number(params.consumption_kwh, 0.0)
    generation = coerce_number(params.generation_kwh, 0.0)
    if consumption <= 0 and generation <= 0:
        result.errors.append("Neither consumption nor estimated generation is positive; economy will be 0.")

    for name in (
        "consumption_kwh", "full_tariff", "minimum_charge", "capex",
        "generation_kwh", "annual_inflation_pct", "discount_rate_pct",
    ):
        value = getattr(params, name)
        if _is_unusable(value):
            result.warnings.append(f"{name} is not a finite number and will be treated as 0.")
        elif name not in ("annual_inflation_pct", "discount_rate_pct") and _is_negative(value):
            result.warnings.append(f"{name} is negative ({value}) and will be clamped to 0.")

    inflation = coerce_number(params.annual_inflation_pct, None)
    if inflation is not None and inflation <= -100:
        result.warnings.append("Annual inflation at or below -100% is treated as 0.")

    if coerce_number(params.full_tariff, 0.0) <= 0:
        result.warnings.append("Full tariff is zero; economy will be 0.")

    plan = params.payment if isinstance(params.payment, PaymentPlan) else CashPayment()
    schedule = plan.schedule(max(coerce_number(params.capex, 0.0), 0.0), cfg)
    if horizon is not None and schedule.count > horizon:
        result.warnings.append(
            f"{schedule.count} installments exceed the {int(horizon)}-month horizon; "
            f"the remainder is not projected."
        )

    return result
