import math

from rental_vs_index.core.amortization import (
    MortgageTerms,
    amort_schedule,
    canadian_monthly_rate,
    fixed_monthly_payment,
    principal_for_payment,
    summarize,
)
from rental_vs_index.core.model import SimulationParams


def test_fixed_payment_known_case():
    # Known approximate monthly payment for 100k @5% (monthly compounding) over 20y ~ 659.96
    payment = fixed_monthly_payment(100_000, 0.05 / 12, 240)
    assert math.isclose(payment, 659.96, rel_tol=1e-3, abs_tol=1e-1)


def test_canadian_rate_compounds_semi_annually():
    m = canadian_monthly_rate(4.8)
    assert math.isclose((1 + m) ** 6, 1.024, rel_tol=1e-12)
    assert m < 0.048 / 12


def test_canadian_payment_below_monthly_compounding():
    canadian = fixed_monthly_payment(600_000, canadian_monthly_rate(4.8), 300)
    monthly = fixed_monthly_payment(600_000, 0.048 / 12, 300)
    assert canadian < monthly


def test_zero_rate_is_straight_line():
    assert canadian_monthly_rate(0.0) == 0.0
    assert fixed_monthly_payment(120_000, 0.0, 120) == 1_000.0
    assert principal_for_payment(1_000.0, 0.0, 120) == 120_000.0


def test_no_payments():
    assert fixed_monthly_payment(100_000, 0.004, 0) == 0.0
    assert amort_schedule(MortgageTerms(100_000, 0.004, 0.0, 0)).empty


def test_undefined_rate_is_nan():
    assert math.isnan(canadian_monthly_rate(-250.0))


def test_principal_for_payment_inverts_payment():
    m = canadian_monthly_rate(4.8)
    payment = fixed_monthly_payment(600_000, m, 300)
    assert math.isclose(principal_for_payment(payment, m, 300), 600_000, rel_tol=1e-9)


def test_amort_schedule_balances_down_to_zero():
    terms = MortgageTerms.from_params(SimulationParams(purchase_price=250_000, down_payment_percent=20, mortgage_rate=4.0))
    df = amort_schedule(terms)
    assert len(df) == 300
    assert df.iloc[-1]["balance"] == 0.0
    assert math.isclose(df["principal"].sum(), terms.principal, rel_tol=1e-9)
    assert (df["balance"].diff().dropna() <= 0).all()


def test_summarize_yearly():
    s = summarize(MortgageTerms.from_params(SimulationParams()))
    assert len(s.schedule_yearly) == 25
    assert s.schedule_yearly.iloc[-1]["end_balance"] == 0.0
    assert math.isclose(s.schedule_yearly.iloc[0]["payment"], 12 * s.payment_monthly)
    assert math.isclose(s.schedule_yearly["principal"].sum(), 600_000, rel_tol=1e-9)
