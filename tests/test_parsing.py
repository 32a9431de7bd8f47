import logging

import pytest

from billing import ContractTerms, RawInvoiceReading, compute_bill
from core.errors import MissingConsumptionError
from engine import SaleParameters
from parsing import (
    extract_reference_month,
    find_number_after,
    normalize_invoice_text,
    parse_energy_invoice,
    validate_reading,
    validate_sale_parameters,
    validate_terms,
)
from payments import InstallmentPayment

pytestmark = pytest.mark.parsing

INVOICE_TEXT = """
EQUATORIAL GO
CONTA DE ENERGIA   REFERENTE A JAN/2024
CONSUMO KWH 2.300
ENERGIA COMPENSADA 200
CREDITO ANTERIOR 100
CREDITO ATUAL 50
TARIFA CHEIA 1,10
TARIFA DESCONTO 0,88
CIP 12,50
BANDEIRA 0,00
ENCARGOS 3,20
"""


def test_normalize_invoice_text():
    assert normalize_invoice_text("  conta\n de\tenergia ") == "CONTA DE ENERGIA"
    assert normalize_invoice_text(None) == ""


@pytest.mark.parametrize(
    "text,expected",
    [
        ("REFERENTE A JAN/2024", "2024-01"),
        ("dez 2023", "2023-12"),
        ("MAR-2025", "2025-03"),
        ("Vencimento 03/2023", "2023-03"),
        ("sem data", None),
    ],
)
def test_extract_reference_month(text, expected):
    assert extract_reference_month(text) == expected


def test_find_number_after():
    assert find_number_after("TOTAL", "TOTAL A PAGAR R$ 1.234,56") == pytest.approx(1234.56)
    assert find_number_after("CIP|ILUMINA", "ILUMINACAO 9,90") == pytest.approx(9.9)
    assert find_number_after("BANDEIRA", "NADA AQUI") is None


def test_parse_energy_invoice():
    reading = parse_energy_invoice(INVOICE_TEXT)

    assert reading.consumption_kwh == 2300
    assert reading.compensated_kwh == 200
    assert reading.prior_credits_kwh == 100
    assert reading.current_credits_kwh == 50
    assert reading.full_tariff == pytest.approx(1.10)
    assert reading.discounted_tariff == pytest.approx(0.88)
    assert reading.public_lighting_fee == pytest.approx(12.5)
    assert reading.tariff_flag_fee == 0.0
    assert reading.other_charges == pytest.approx(3.2)
    assert reading.distributor == "EQUATORIAL"
    assert reading.state == "GO"
    assert reading.reference_month == "2024-01"


def test_parsed_invoice_feeds_the_reconciler():
    reading = parse_energy_invoice(INVOICE_TEXT)
    terms = ContractTerms(contracted_quota_kwh=2000, include_public_lighting=True, include_tariff_flag=True)
    assert compute_bill(reading, terms).total == 2157.50


def test_invoice_without_consumption(caplog):
    with caplog.at_level(logging.WARNING, logger="parsing.invoice_parser"):
        reading = parse_energy_invoice("EQUATORIAL GO TARIFA 1,10")

    assert reading.consumption_kwh is None
    assert reading.full_tariff == pytest.approx(1.1)
    assert "No consumption" in caplog.text
    with pytest.raises(MissingConsumptionError):
        compute_bill(reading, ContractTerms())


def test_empty_invoice_text():
    reading = parse_energy_invoice("")
    assert reading == RawInvoiceReading()


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def test_reading_without_consumption_is_invalid():
    result = validate_reading(RawInvoiceReading())
    assert not result.is_valid
    assert len(result.errors) == 1
    assert result.summary().splitlines() == [
        "Fatura: 1 erro(s), 3 aviso(s); cálculo bloqueado.",
        "  ERRO: Consumption is missing or not a number; the bill cannot be computed.",
        "  AVISO: Full tariff missing; the regional default tariff will be used.",
        "  AVISO: Reference month missing.",
        "  AVISO: State/distributor missing; regional defaults will be used.",
    ]


def test_reading_warnings():
    reading = RawInvoiceReading(consumption_kwh=100, tariff_flag_fee=-5, other_charges=float("nan"))
    result = validate_reading(reading, ContractTerms(contracted_quota_kwh=100, discount_fraction=20))

    assert result.is_valid
    assert any("tariff_flag_fee is negative" in w for w in result.warnings)
    assert any("other_charges" in w for w in result.warnings)
    assert any("regional default tariff" in w for w in result.warnings)
    assert any("outside [0, 1]" in w for w in result.warnings)


def test_contract_findings_join_the_reading_result():
    terms = ContractTerms(discount_fraction=1.5)
    alone = validate_terms(terms)
    assert alone.summary().splitlines() == [
        "Contrato: 0 erro(s), 2 aviso(s); cálculo segue com ajustes.",
        "  AVISO: Contracted quota (Kc) missing; 0 kWh will be billed as quota.",
        "  AVISO: Discount 1.5 is outside [0, 1]; check if it is in percent vs fraction form.",
    ]

    reading = RawInvoiceReading(
        consumption_kwh=100, full_tariff=1.0, reference_month="2024-01", distributor="EQUATORIAL", state="GO",
    )
    merged = validate_reading(reading, terms)
    assert merged.subject == "fatura"
    assert merged.is_valid
    assert merged.warnings == alone.warnings


def test_complete_reading_passes():
    reading = parse_energy_invoice(INVOICE_TEXT)
    result = validate_reading(reading, ContractTerms(contracted_quota_kwh=2000, discount_fraction=0.2))
    assert result.is_valid
    assert result.warnings == []


def test_empty_sale_parameters_are_invalid():
    result = validate_sale_parameters(SaleParameters())
    assert not result.is_valid
    assert len(result.errors) == 2


def test_sale_parameters_installments_beyond_horizon():
    params = SaleParameters(
        consumption_kwh=500, full_tariff=1.0, horizon_months=12, capex=1000,
        payment=InstallmentPayment(installments=24),
    )
    result = validate_sale_parameters(params)
    assert result.is_valid
    assert any("exceed the 12-month horizon" in w for w in result.warnings)


def test_clean_sale_parameters():
    params = SaleParameters(consumption_kwh=500, full_tariff=1.0, horizon_months=12, capex=1000)
    result = validate_sale_parameters(params)
    assert result.is_valid
    assert result.warnings == []
    assert result.summary() == "Proposta sem pendências."
