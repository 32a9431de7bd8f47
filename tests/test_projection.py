import numpy as np
import pytest

from core.config import ProjectionConfig
from core.schema import PaymentCondition, PaymentMode
from core.utils import annual_to_monthly_rate, level_payment
from engine import SaleParameters, compute_roi
from engine.cashflow import cumulative_balance, first_payback
from payments import (
    CashPayment,
    FinancingPayment,
    InstallmentPayment,
    PaymentSchedule,
    SplitPayment,
    coerce_mode,
    resolve_monthly_rate,
)

pytestmark = pytest.mark.projection


def flat_sale(**overrides):
    """500 kWh at R$ 1,00, no inflation or minimum charge: economy is 500/month."""
    base = dict(
        consumption_kwh=500,
        full_tariff=1.0,
        annual_inflation_pct=0,
        minimum_charge=0,
        horizon_months=12,
        capex=10000,
        payment=CashPayment(),
    )
    base.update(overrides)
    return SaleParameters(**base)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_level_payment_zero_rate():
    assert level_payment(1000, 0.0, 10) == 100


@pytest.mark.parametrize("n", [0, -3])
def test_level_payment_without_periods(n):
    assert level_payment(1000, 0.01, n) == 0.0


def test_level_payment_amortizes_principal():
    rate, n = 0.015, 24
    pmt = level_payment(10000, rate, n)
    balance = 10000.0
    for _ in range(n):
        balance = balance * (1 + rate) - pmt
    assert balance == pytest.approx(0.0, abs=1e-6)


def test_annual_to_monthly_rate():
    assert annual_to_monthly_rate(12.682503013196972) == pytest.approx(0.01)
    assert annual_to_monthly_rate(0) == 0.0
    assert annual_to_monthly_rate(-100) == 0.0
    assert annual_to_monthly_rate(float("nan")) == 0.0
    assert annual_to_monthly_rate(None) == 0.0


def test_monthly_rate_wins_over_annual():
    assert resolve_monthly_rate(1.0, 50.0) == pytest.approx(0.01)
    assert resolve_monthly_rate(None, 12.682503013196972) == pytest.approx(0.01)
    assert resolve_monthly_rate(None, None) == 0.0


def test_schedule_series_drops_charges_past_horizon():
    series = PaymentSchedule(upfront=50.0, amount=10.0, count=5).to_series(3)
    assert series.tolist() == [50.0, 10.0, 10.0, 10.0]


def test_cumulative_balance_and_payback():
    flow = np.array([-1000.0, 400.0, 400.0, 400.0])
    balance = cumulative_balance(flow)
    assert balance.tolist() == [-1000.0, -600.0, -200.0, 200.0]
    assert first_payback(balance) == 3
    assert first_payback(np.array([5.0, -1.0])) is None


@pytest.mark.parametrize(
    "mode,expected",
    [("pix", PaymentMode.PIX), ("CREDIT", PaymentMode.CREDIT), ("boleto", PaymentMode.PIX), (None, PaymentMode.PIX)],
)
def test_coerce_mode(mode, expected):
    assert coerce_mode(mode) is expected


@pytest.mark.parametrize(
    "plan,expected",
    [(InstallmentPayment(), 12), (FinancingPayment(), 60), (SplitPayment(), 12)],
)
def test_default_installment_counts(plan, expected):
    assert plan.schedule(1200.0, ProjectionConfig()).count == expected


# ---------------------------------------------------------------------------
# Cash
# ---------------------------------------------------------------------------

def test_cash_pix_reference_projection():
    p = compute_roi(flat_sale())

    assert p.horizon == 12
    assert p.payment[0] == 10000
    assert np.all(p.payment[1:] == 0)
    assert p.economy[0] == 0
    assert np.all(p.economy[1:] == 500)
    assert p.balance[0] == -10000
    assert p.balance[12] == pytest.approx(-4000)
    assert p.payback is None
    assert p.roi == pytest.approx(-0.4)
    assert p.npv is None
    assert p.initial_outlay == 10000
    assert p.total_payments == 10000


@pytest.mark.parametrize(
    "mode,outlay",
    [(PaymentMode.PIX, 10100.0), (PaymentMode.DEBIT, 10200.0), (PaymentMode.CREDIT, 10300.0)],
)
def test_cash_mdr_depends_on_mode(mode, outlay):
    plan = CashPayment(mode=mode, pix_mdr_pct=1, debit_mdr_pct=2, credit_mdr_pct=3)
    p = compute_roi(flat_sale(payment=plan))
    assert p.payment[0] == pytest.approx(outlay)
    assert p.roi == pytest.approx((6000 - outlay) / outlay)


def test_cash_payback_month():
    p = compute_roi(flat_sale(capex=5000))
    assert p.payback == 10
    assert p.balance[10] == pytest.approx(0.0)
    assert p.balance[9] < 0


def test_payback_moves_later_with_capex():
    paybacks = [compute_roi(flat_sale(capex=c, horizon_months=60)).payback for c in (1000, 3000, 6000, 12000)]
    assert paybacks == sorted(paybacks)


# ---------------------------------------------------------------------------
# Installments / financing / split
# ---------------------------------------------------------------------------

def test_card_installments_zero_rate():
    plan = InstallmentPayment(installments=10, monthly_rate_pct=0)
    p = compute_roi(flat_sale(capex=1000, payment=plan))

    assert p.payment[0] == 0
    assert p.payment[1:11].tolist() == pytest.approx([100.0] * 10)
    assert p.payment[11:].tolist() == [0.0, 0.0]
    assert p.initial_outlay == 0
    assert p.total_payments == pytest.approx(1000)
    assert p.roi == pytest.approx((6000 - 1000) / 1000)


def test_card_installments_add_mdr_to_each_payment():
    plan = InstallmentPayment(installments=10, monthly_rate_pct=0, mdr_pct=5)
    p = compute_roi(flat_sale(capex=1000, payment=plan))
    assert p.payment[1] == pytest.approx(105.0)


def test_card_installments_with_interest():
    plan = InstallmentPayment(installments=10, monthly_rate_pct=1.0, annual_rate_pct=50)
    p = compute_roi(flat_sale(capex=1000, payment=plan))
    assert p.payment[1] == pytest.approx(level_payment(1000, 0.01, 10))


def test_financing_down_payment_and_truncation():
    plan = FinancingPayment(installments=24, down_payment=2000, annual_rate_pct=0)
    p = compute_roi(flat_sale(capex=10000, payment=plan))

    assert p.payment[0] == 2000
    assert p.payment[1] == pytest.approx(8000 / 24)
    assert len(p.payment) == 13
    assert p.total_payments == pytest.approx(2000 + 12 * 8000 / 24)


def test_financing_down_payment_above_capex():
    plan = FinancingPayment(installments=12, down_payment=15000, annual_rate_pct=20)
    p = compute_roi(flat_sale(capex=10000, payment=plan))
    assert p.payment[0] == 15000
    assert np.all(p.payment[1:] == 0)


@pytest.mark.parametrize("kind", [PaymentCondition.BOLETO, PaymentCondition.AUTO_DEBIT])
def test_split_payment(kind):
    plan = SplitPayment(kind=kind, installments=4)
    p = compute_roi(flat_sale(capex=1200, payment=plan))
    assert plan.condition is kind
    assert p.payment[1:5].tolist() == [300.0] * 4
    assert np.all(p.payment[5:] == 0)


# ---------------------------------------------------------------------------
# Economy
# ---------------------------------------------------------------------------

def test_inflation_compounds_monthly():
    p = compute_roi(flat_sale(annual_inflation_pct=8, horizon_months=13))
    assert p.economy[1] == pytest.approx(500)
    assert p.economy[13] == pytest.approx(500 * 1.08)


def test_minimum_charge_reduces_economy():
    assert compute_roi(flat_sale(minimum_charge=100)).economy[1] == pytest.approx(400)
    assert compute_roi(flat_sale(minimum_charge=100, apply_minimum_charge=False)).economy[1] == pytest.approx(500)
    assert compute_roi(flat_sale(minimum_charge=900)).economy[1] == 0


def test_generation_overrides_consumption():
    assert compute_roi(flat_sale(generation_kwh=800)).economy[1] == pytest.approx(800)
    assert compute_roi(flat_sale(generation_kwh=0)).economy[1] == pytest.approx(500)


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "plan",
    [
        CashPayment(mode="CREDIT", credit_mdr_pct=4),
        InstallmentPayment(installments=18, annual_rate_pct=24),
        FinancingPayment(installments=48, down_payment=3000, monthly_rate_pct=1.2),
        SplitPayment(installments=6),
    ],
)
def test_series_invariants(plan):
    p = compute_roi(flat_sale(annual_inflation_pct=6, horizon_months=36, minimum_charge=50, payment=plan))

    assert len(p.economy) == len(p.payment) == len(p.flow) == len(p.balance) == 37
    assert np.allclose(p.flow, p.economy - p.payment)
    assert np.allclose(p.balance, np.cumsum(p.flow))
    assert np.all(p.economy >= 0)
    if p.payback is not None:
        assert p.balance[p.payback] >= 0
        assert np.all(p.balance[1:p.payback] < 0)


def test_npv_only_with_discount_rate():
    assert compute_roi(flat_sale()).npv is None

    p = compute_roi(flat_sale(discount_rate_pct=0))
    assert p.npv == pytest.approx(float(np.sum(p.flow)))

    p = compute_roi(flat_sale(discount_rate_pct=12))
    r = annual_to_monthly_rate(12)
    expected = sum(f / (1 + r) ** m for m, f in enumerate(p.flow))
    assert p.npv == pytest.approx(expected)
    assert p.npv < float(np.sum(p.flow))


def test_empty_parameters_give_zero_projection():
    p = compute_roi(SaleParameters())
    assert p.horizon == 0
    assert p.balance.tolist() == [0.0]
    assert p.payback is None
    assert p.roi == 0.0
    assert p.npv is None


def test_garbage_inputs_are_coerced():
    p = compute_roi(
        flat_sale(consumption_kwh=float("nan"), capex=-500, full_tariff=float("inf"), payment="not a plan")
    )
    assert np.all(p.economy == 0)
    assert np.all(p.payment == 0)
    assert p.roi == 0.0


def test_projection_arrays_are_read_only():
    p = compute_roi(flat_sale())
    with pytest.raises(ValueError):
        p.balance[0] = 1.0


def test_projection_to_dict():
    data = compute_roi(flat_sale(horizon_months=2)).to_dict()
    assert data["balance"] == [-10000.0, -9500.0, -9000.0]
    assert data["payback"] is None


@pytest.mark.parametrize(
    "plan",
    [CashPayment(), InstallmentPayment(installments=18, annual_rate_pct=24), SplitPayment(installments=6)],
)
def test_same_inputs_same_projection(plan):
    params = flat_sale(annual_inflation_pct=7.5, discount_rate_pct=11, horizon_months=24, payment=plan)
    first = compute_roi(params)
    second = compute_roi(params)

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert first != compute_roi(flat_sale(capex=9999, payment=plan))


def test_projection_is_not_hashable():
    with pytest.raises(TypeError):
        hash(compute_roi(flat_sale()))
