import math
from dataclasses import replace

from rental_vs_index.core.amortization import MortgageTerms, canadian_monthly_rate
from rental_vs_index.core.cashflow import monthly_cash_flow
from rental_vs_index.core.model import SimulationParams
from rental_vs_index.core.solver import (
    analyze_break_even,
    first_month_breakdown,
    solve_break_even_down_payment,
    solve_break_even_rent,
)


def first_month(params: SimulationParams) -> float:
    terms = MortgageTerms.from_params(params)
    return monthly_cash_flow(
        params.monthly_rent,
        params.utilities_monthly,
        terms.payment,
        params.vacancy_rate,
        params.operating_expense_percent,
    ).cash_flow


def test_breakdown_first_month():
    params = SimulationParams()
    b = first_month_breakdown(params)
    assert b.loan_amount == 600_000
    assert math.isclose(b.interest, 600_000 * canadian_monthly_rate(4.8))
    assert math.isclose(b.interest + b.principal, b.mortgage_payment)
    assert math.isclose(b.cash_flow, first_month(params))
    assert math.isclose(b.annual_cash_flow, 12 * b.cash_flow)


def test_break_even_rent_zeroes_cash_flow():
    params = SimulationParams(utilities_monthly=150)
    solved = solve_break_even_rent(params)
    assert solved.solvable
    assert abs(first_month(replace(params, monthly_rent=solved.value))) < 1e-6


def test_break_even_rent_unsolvable_when_rent_fully_consumed():
    for vacancy, opex in [(50, 50), (40, 70)]:
        solved = solve_break_even_rent(SimulationParams(vacancy_rate=vacancy, operating_expense_percent=opex))
        assert not solved.solvable
        assert solved.value == 0.0


def test_break_even_down_payment_zeroes_cash_flow():
    params = SimulationParams()
    solved = solve_break_even_down_payment(params)
    assert solved.solvable
    # Reference scenario is cash-flow negative at 20% down.
    assert 20 < solved.value < 100
    assert abs(first_month(replace(params, down_payment_percent=solved.value))) < 1e-6


def test_break_even_down_payment_clamped_at_zero():
    solved = solve_break_even_down_payment(SimulationParams(monthly_rent=10_000))
    assert solved.solvable
    assert solved.value == 0.0


def test_break_even_down_payment_unsolvable_without_income():
    solved = solve_break_even_down_payment(SimulationParams(operating_expense_percent=100))
    assert not solved.solvable


def test_analyze_break_even_bundles_both():
    analysis = analyze_break_even(SimulationParams())
    assert analysis.rent.solvable
    assert analysis.rent.value > SimulationParams().monthly_rent
    assert analysis.down_payment_percent.solvable
    assert analysis.breakdown.cash_flow < 0


def test_break_even_down_payment_above_full_price_is_unsolvable():
    solved = solve_break_even_down_payment(SimulationParams(purchase_price=-100_000))
    assert solved.solvable is False
    assert solved.value > 100


def test_break_even_down_payment_zero_price_is_unsolvable():
    solved = solve_break_even_down_payment(SimulationParams(purchase_price=0))
    assert solved.solvable is False


def test_rounding_break_even_rent_up_keeps_cash_flow_non_negative():
    for params in [SimulationParams(), SimulationParams(utilities_monthly=137.5, vacancy_rate=3.1)]:
        solved = solve_break_even_rent(params)
        assert first_month(replace(params, monthly_rent=math.ceil(solved.value))) >= 0
