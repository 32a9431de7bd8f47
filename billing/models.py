"""
Billing inputs and outputs.

RawInvoiceReading is what the invoice parser extracts from one energy bill;
ContractTerms are the commercial parameters of one active contract. Both are
consumed as-is: missing numbers are resolved by the reconciler, not here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from core.schema import LineCode


@dataclass(frozen=True)
class RawInvoiceReading:
    consumption_kwh: Optional[float] = None
    compensated_kwh: Optional[float] = None
    prior_credits_kwh: Optional[float] = None
    current_credits_kwh: Optional[float] = None

    full_tariff: Optional[float] = None        # R$/kWh
    discounted_tariff: Optional[float] = None  # R$/kWh, floor tariff stated on the invoice

    public_lighting_fee: Optional[float] = None  # CIP
    tariff_flag_fee: Optional[float] = None      # bandeira tarifária
    other_charges: Optional[float] = None

    reference_month: Optional[str] = None  # "YYYY-MM"
    distributor: Optional[str] = None
    state: Optional[str] = None


@dataclass(frozen=True)
class ContractTerms:
    contract_id: str = ""
    contracted_quota_kwh: Optional[float] = None  # Kc
    discount_fraction: Optional[float] = None     # 0.2 == 20% off the full tariff
    include_public_lighting: bool = False
    include_tariff_flag: bool = False
    include_other_charges: bool = False


@dataclass(frozen=True)
class BillItem:
    code: LineCode
    description: str
    value: float
    included: bool


@dataclass(frozen=True)
class BillMeta:
    state: str
    distributor: str
    reference_month: str
    contract_id: str
    computed_at: str
    engine_version: str


@dataclass(frozen=True)
class Bill:
    items: Tuple[BillItem, ...]
    total: float
    meta: BillMeta
    summary: str

    @property
    def included_items(self) -> Tuple[BillItem, ...]:
        return tuple(i for i in self.items if i.included)

    def item(self, code: LineCode) -> Optional[BillItem]:
        for i in self.items:
            if i.code == code:
                return i
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "items": [
                {
                    "code": i.code.value,
                    "description": i.description,
                    "value": i.value,
                    "included": i.included,
                }
                for i in self.items
            ],
            "meta": asdict(self.meta),
            "summary": self.summary,
        }
