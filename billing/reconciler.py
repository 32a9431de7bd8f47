"""
Billing reconciliation: one invoice reading + one contract -> itemized bill.

Rounding matches the documents already issued:
  1. every item value is rounded to 2 decimals, ties away from zero on the
     exact binary value (1.115 -> 1.11)
  2. the total is the sum of the rounded included items, rounded again

Descriptions and the summary embed the raw numbers (Kc=2000, R$ 0.88) in the
same text the issued documents carry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from core.config import BillingConfig
from core.errors import MissingConsumptionError
from core.schema import LineCode
from core.utils import coerce_number, plain_number, round_money, to_fixed

from .models import Bill, BillItem, BillMeta, ContractTerms, RawInvoiceReading

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedInputs:
    """Reading and terms after every default has been applied."""
    consumption: float
    quota: float
    discount: float
    full_tariff: float
    discounted_tariff: float
    credits: float
    compensated: float


def resolve_inputs(
    reading: RawInvoiceReading,
    terms: ContractTerms,
    config: BillingConfig,
) -> ResolvedInputs:
    """Apply the default policy to the nullable fields. Raises only for consumption."""
    consumption = coerce_number(reading.consumption_kwh, None)
    if consumption is None:
        raise MissingConsumptionError()

    quota = coerce_number(terms.contracted_quota_kwh, 0.0)
    discount = coerce_number(terms.discount_fraction, 0.0)

    full_tariff = coerce_number(reading.full_tariff, None)
    if full_tariff is None:
        logger.debug("Invoice has no full tariff; using default %.4f", config.default_full_tariff)
        full_tariff = config.default_full_tariff

    # a floor tariff printed on the invoice wins over the contract discount
    discounted_tariff = coerce_number(reading.discounted_tariff, full_tariff * (1.0 - discount))

    credits = coerce_number(reading.prior_credits_kwh, 0.0) + coerce_number(
        reading.current_credits_kwh, 0.0
    )
    compensated = coerce_number(reading.compensated_kwh, 0.0)

    return ResolvedInputs(
        consumption=consumption,
        quota=quota,
        discount=discount,
        full_tariff=full_tariff,
        discounted_tariff=discounted_tariff,
        credits=credits,
        compensated=compensated,
    )


def excess_kwh(consumption: float, quota: float, credits: float, compensated: float) -> float:
    """Energy beyond the contracted quota after banked credits; never negative."""
    return max(consumption - quota - credits + compensated, 0.0)


def _item(code: LineCode, description: str, value: float, included: bool) -> BillItem:
    return BillItem(code=code, description=description, value=round_money(value), included=included)


def compute_bill(
    reading: RawInvoiceReading,
    terms: ContractTerms,
    *,
    config: Optional[BillingConfig] = None,
    now: Optional[datetime] = None,
) -> Bill:
    """
    Compute the itemized bill for one invoice under one contract.

    Parameters
    ----------
    reading : RawInvoiceReading
        Parsed invoice. Only consumption is mandatory.
    terms : ContractTerms
        Quota (Kc), discount and which pass-through charges are billed.
    config : BillingConfig, optional
        Regional defaults; built from environment settings when omitted.
    now : datetime, optional
        Computation timestamp recorded in the metadata. Pin it to get
        bit-identical bills for identical inputs.

    Raises
    ------
    MissingConsumptionError
        When the reading has no finite consumption. Nothing is built first.
    """
    cfg = config if config is not None else BillingConfig.from_settings()
    r = resolve_inputs(reading, terms, cfg)

    excess = excess_kwh(r.consumption, r.quota, r.credits, r.compensated)

    items: List[BillItem] = [
        _item(
            LineCode.QUOTA,
            f"Energia contratada ({plain_number(r.quota)} kWh) x Tarifa Piso",
            r.quota * r.discounted_tariff,
            True,
        ),
        _item(
            LineCode.EXCESS,
            f"Excedente ({to_fixed(excess, 0)} kWh) x Tarifa Cheia",
            excess * r.full_tariff,
            excess > 0,
        ),
    ]

    if terms.include_public_lighting:
        items.append(_item(
            LineCode.PUBLIC_LIGHTING,
            "Contribuição de Iluminação Pública",
            coerce_number(reading.public_lighting_fee, 0.0),
            True,
        ))
    if terms.include_tariff_flag:
        items.append(_item(
            LineCode.TARIFF_FLAG,
            "Bandeira tarifária",
            coerce_number(reading.tariff_flag_fee, 0.0),
            True,
        ))
    if terms.include_other_charges:
        items.append(_item(
            LineCode.OTHER_CHARGES,
            "Outros encargos",
            coerce_number(reading.other_charges, 0.0),
            True,
        ))

    total = round_money(sum(i.value for i in items if i.included))

    stamp = now if now is not None else datetime.now(timezone.utc)
    meta = BillMeta(
        state=reading.state or cfg.default_state,
        distributor=reading.distributor or cfg.default_distributor,
        reference_month=reading.reference_month or cfg.missing_reference_month,
        contract_id=terms.contract_id,
        computed_at=stamp.isoformat(),
        engine_version=cfg.engine_version,
    )

    summary = (
        f"Cálculo com base em Kc={plain_number(r.quota)} kWh, "
        f"consumo real {plain_number(r.consumption)} kWh, "
        f"créditos {plain_number(r.credits)} kWh, "
        f"tarifa piso R$ {to_fixed(r.discounted_tariff, 2)}/kWh e "
        f"tarifa excedente R$ {to_fixed(r.full_tariff, 2)}/kWh."
    )

    logger.debug(
        "Bill for contract %s: excess=%.2f kWh, %d items, total=%.2f",
        terms.contract_id, excess, len(items), total,
    )

    return Bill(items=tuple(items), total=total, meta=meta, summary=summary)
