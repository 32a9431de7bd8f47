"""
Pydantic schemas for CLI payloads.
Numbers may arrive as JSON numbers or as pt-BR strings ("1.234,56").
"""
from datetime import datetime
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from billing.models import ContractTerms, RawInvoiceReading
from core.schema import PaymentCondition
from engine.models import SaleParameters
from formatting.numbers import to_number_flexible
from payments import CashPayment, FinancingPayment, InstallmentPayment, SplitPayment


def _to_count(value):
    number = to_number_flexible(value)
    return None if number is None else int(number // 1)


FlexibleNumber = Annotated[Optional[float], BeforeValidator(to_number_flexible)]
FlexibleCount = Annotated[Optional[int], BeforeValidator(_to_count)]


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")


class ReadingIn(_Payload):
    """Invoice values as read by the operator or the OCR step."""
    consumption_kwh: FlexibleNumber = None
    compensated_kwh: FlexibleNumber = None
    prior_credits_kwh: FlexibleNumber = None
    current_credits_kwh: FlexibleNumber = None
    full_tariff: FlexibleNumber = None
    discounted_tariff: FlexibleNumber = None
    public_lighting_fee: FlexibleNumber = None
    tariff_flag_fee: FlexibleNumber = None
    other_charges: FlexibleNumber = None
    reference_month: Optional[str] = Field(None, description="YYYY-MM")
    distributor: Optional[str] = None
    state: Optional[str] = Field(None, max_length=2)

    def to_domain(self) -> RawInvoiceReading:
        return RawInvoiceReading(**self.model_dump())


class TermsIn(_Payload):
    contract_id: str = ""
    contracted_quota_kwh: FlexibleNumber = None
    discount_fraction: FlexibleNumber = None
    include_public_lighting: bool = False
    include_tariff_flag: bool = False
    include_other_charges: bool = False

    def to_domain(self) -> ContractTerms:
        return ContractTerms(**self.model_dump())


class BillPayload(_Payload):
    reading: ReadingIn
    terms: TermsIn = Field(default_factory=TermsIn)
    computed_at: Optional[datetime] = Field(
        None, description="Fixes the bill timestamp; current UTC time when omitted"
    )


class CashPaymentIn(_Payload):
    condition: Literal["CASH"] = "CASH"
    mode: Optional[str] = "PIX"
    pix_mdr_pct: FlexibleNumber = 0.0
    debit_mdr_pct: FlexibleNumber = 0.0
    credit_mdr_pct: FlexibleNumber = 0.0

    def to_plan(self) -> CashPayment:
        return CashPayment(
            mode=self.mode.upper() if self.mode else None,
            pix_mdr_pct=self.pix_mdr_pct,
            debit_mdr_pct=self.debit_mdr_pct,
            credit_mdr_pct=self.credit_mdr_pct,
        )


class InstallmentPaymentIn(_Payload):
    condition: Literal["INSTALLMENTS"]
    installments: FlexibleCount = None
    monthly_rate_pct: FlexibleNumber = None
    annual_rate_pct: FlexibleNumber = None
    mdr_pct: FlexibleNumber = 0.0

    def to_plan(self) -> InstallmentPayment:
        return InstallmentPayment(**self.model_dump(exclude={"condition"}))


class FinancingPaymentIn(_Payload):
    condition: Literal["FINANCING"]
    installments: FlexibleCount = None
    down_payment: FlexibleNumber = 0.0
    monthly_rate_pct: FlexibleNumber = None
    annual_rate_pct: FlexibleNumber = None

    def to_plan(self) -> FinancingPayment:
        return FinancingPayment(**self.model_dump(exclude={"condition"}))


class SplitPaymentIn(_Payload):
    condition: Literal["BOLETO", "AUTO_DEBIT"]
    installments: FlexibleCount = None

    def to_plan(self) -> SplitPayment:
        return SplitPayment(kind=PaymentCondition(self.condition), installments=self.installments)


PaymentIn = Annotated[
    Union[CashPaymentIn, InstallmentPaymentIn, FinancingPaymentIn, SplitPaymentIn],
    Field(discriminator="condition"),
]


class RoiPayload(_Payload):
    """
    One proposal. `payment.condition` selects the plan:
    CASH, INSTALLMENTS, FINANCING, BOLETO or AUTO_DEBIT.
    """
    consumption_kwh: FlexibleNumber = None
    full_tariff: FlexibleNumber = None
    annual_inflation_pct: FlexibleNumber = None
    minimum_charge: FlexibleNumber = None
    horizon_months: FlexibleCount = None
    capex: FlexibleNumber = None
    discount_rate_pct: FlexibleNumber = None
    generation_kwh: FlexibleNumber = None
    apply_minimum_charge: bool = True
    payment: PaymentIn = Field(default_factory=CashPaymentIn)

    def to_domain(self) -> SaleParameters:
        fields = self.model_dump(exclude={"payment"})
        return SaleParameters(payment=self.payment.to_plan(), **fields)
