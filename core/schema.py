from __future__ import annotations

from enum import Enum
from typing import Dict


class LineCode(str, Enum):
    """Codes of the bill line items, in the order they are emitted."""

    QUOTA = "PISO"
    EXCESS = "EXCEDENTE"
    PUBLIC_LIGHTING = "CIP"
    TARIFF_FLAG = "BANDEIRA"
    OTHER_CHARGES = "ENCARGOS"


class PaymentCondition(str, Enum):
    CASH = "CASH"
    INSTALLMENTS = "INSTALLMENTS"
    FINANCING = "FINANCING"
    BOLETO = "BOLETO"
    AUTO_DEBIT = "AUTO_DEBIT"


class PaymentMode(str, Enum):
    """How a CASH sale is settled; each mode carries its own MDR."""

    PIX = "PIX"
    DEBIT = "DEBIT"
    CREDIT = "CREDIT"


PAYMENT_CONDITION_LABELS: Dict[PaymentCondition, str] = {
    PaymentCondition.CASH: "Pagamento à vista",
    PaymentCondition.INSTALLMENTS: "Cartão de crédito (parcelado)",
    PaymentCondition.FINANCING: "Financiamento via bancos parceiros",
    PaymentCondition.BOLETO: "Boleto bancário",
    PaymentCondition.AUTO_DEBIT: "Débito automático",
}

PAYMENT_MODE_LABELS: Dict[PaymentMode, str] = {
    PaymentMode.PIX: "Pix e transferência bancária (à vista)",
    PaymentMode.DEBIT: "Cartão de débito (à vista)",
    PaymentMode.CREDIT: "Cartão de crédito (à vista)",
}

# Labels the invoice parser looks for, keyed by RawInvoiceReading field.
INVOICE_LABELS: Dict[str, str] = {
    "consumption_kwh": r"CONSUMO|ENERGIA EL[AÉ]TRICA",
    "compensated_kwh": r"ENERGIA COMPENSADA|CR[EÉ]DITO",
    "prior_credits_kwh": r"CR[EÉ]DITO\s+ANT",
    "current_credits_kwh": r"CR[EÉ]DITO\s+ATUAL",
    "full_tariff": r"TARIFA|TUSD|\bTE\b",
    "discounted_tariff": r"TARIFA\s+DESCONTO|PISO",
    "public_lighting_fee": r"CIP|ILUMINA[CÇ][AÃ]O P[UÚ]BLICA",
    "tariff_flag_fee": r"BANDEIRA",
    "other_charges": r"ENCARGOS|TAXAS",
}

KNOWN_DISTRIBUTORS = ("EQUATORIAL", "ENEL", "NORTE FLUMINENSE", "CEB", "CEEE")

BRAZILIAN_STATES = (
    "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)
