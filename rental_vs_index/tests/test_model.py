import math

from rental_vs_index.core.amortization import MortgageTerms
from rental_vs_index.core.cashflow import monthly_cash_flow
from rental_vs_index.core.model import (
    SimulationParams,
    SimulationState,
    calculate_simulation,
    step_month,
)


def reference_params() -> SimulationParams:
    return SimulationParams(
        purchase_price=750_000,
        down_payment_percent=20,
        mortgage_rate=4.8,
        amortization_years=25,
        monthly_rent=3_850,
        vacancy_rate=5,
        operating_expense_percent=15,
        utilities_monthly=0,
        property_appreciation=4.5,
        rent_increase=2.5,
        expense_inflation=2.0,
        index_return=9.0,
        closing_costs_percent=1.5,
    )


def test_cash_flow_uses_gross_rent_for_opex():
    month = monthly_cash_flow(3_850, 0, 3_000, 5, 15)
    assert math.isclose(month.vacancy_loss, 192.5)
    assert math.isclose(month.effective_rent, 3_657.5)
    assert math.isclose(month.operating_expenses, 577.5)
    assert math.isclose(month.cash_flow, 3_657.5 - 577.5 - 3_000)


def test_reference_scenario_shape():
    params = reference_params()
    res = calculate_simulation(params)
    assert len(res.data) == 25
    assert [row.year for row in res.data] == list(range(1, 26))
    assert res.data[0].mortgage_balance < 600_000
    last = res.data[-1]
    assert math.isclose(last.equity, last.property_value, abs_tol=1e-3)
    assert math.isclose(res.summary.initial_investment, 150_000 + 11_250)


def test_balance_non_increasing_and_floored():
    res = calculate_simulation(reference_params())
    balances = [row.mortgage_balance for row in res.data]
    assert all(b >= 0 for b in balances)
    assert all(b2 <= b1 for b1, b2 in zip(balances, balances[1:]))


def test_property_value_and_rent_grow_after_each_year():
    params = reference_params()
    res = calculate_simulation(params)
    assert math.isclose(res.data[0].property_value, 750_000 * 1.045)
    values = [row.property_value for row in res.data]
    assert all(v2 >= v1 for v1, v2 in zip(values, values[1:]))


def test_equal_contributions_every_year():
    res = calculate_simulation(reference_params())
    for row in res.data:
        assert row.total_invested == row.index_contributions
    # Reference scenario starts cash-flow negative, so deficits are injected.
    assert res.summary.total_out_of_pocket > res.summary.initial_investment


def test_roi_recomputed_from_last_year():
    res = calculate_simulation(reference_params())
    last = res.data[-1]
    out = last.total_invested
    assert out == res.summary.total_out_of_pocket
    assert math.isclose(res.summary.re_roi, (last.re_net_worth - out) / out * 100)
    assert math.isclose(res.summary.index_roi, (last.index_net_worth - out) / out * 100)


def test_index_roi_measured_against_rental_out_of_pocket():
    res = calculate_simulation(reference_params())
    s = res.summary
    assert math.isclose(s.index_roi, (s.total_index_net_worth - s.total_out_of_pocket) / s.total_out_of_pocket * 100)
    assert res.data[-1].index_contributions == s.total_out_of_pocket


def test_annual_cash_flow_is_sum_of_months():
    params = reference_params()
    terms = MortgageTerms.from_params(params)
    state = SimulationState.initial(params, terms)
    total = 0.0
    for _ in range(12):
        state, month = step_month(state, params, terms)
        total += month.cash_flow
    res = calculate_simulation(params)
    assert math.isclose(res.data[0].annual_cash_flow, total)
    assert math.isclose(res.data[0].mortgage_balance, state.mortgage_balance)
    assert math.isclose(res.data[0].index_investment_value, state.index_investment)


def test_step_month_deficit_goes_to_both_sides():
    params = reference_params()
    terms = MortgageTerms.from_params(params)
    state = SimulationState.initial(params, terms)
    new_state, month = step_month(state, params, terms)
    deficit = -month.cash_flow
    assert deficit > 0
    assert math.isclose(new_state.total_out_of_pocket, state.total_out_of_pocket + deficit)
    assert math.isclose(new_state.index_investment, (state.index_investment + deficit) * (1 + 0.09 / 12))
    assert new_state.accumulated_portfolio == 0.0
    # the input state is left untouched
    assert state.mortgage_balance == terms.principal


def test_step_month_surplus_is_reinvested():
    params = SimulationParams(monthly_rent=8_000)
    terms = MortgageTerms.from_params(params)
    state = SimulationState.initial(params, terms)
    new_state, month = step_month(state, params, terms)
    assert month.cash_flow > 0
    assert math.isclose(new_state.accumulated_portfolio, month.cash_flow * (1 + 0.09 / 12))
    assert new_state.total_out_of_pocket == state.total_out_of_pocket
    assert math.isclose(new_state.index_investment, state.index_investment * (1 + 0.09 / 12))


def test_deterministic():
    assert calculate_simulation(reference_params()) == calculate_simulation(reference_params())


def test_to_frame():
    df = calculate_simulation(reference_params()).to_frame()
    assert len(df) == 25
    assert {"year", "re_net_worth", "index_net_worth", "total_invested"} <= set(df.columns)


def test_zero_out_of_pocket_gives_non_finite_roi():
    params = SimulationParams(
        purchase_price=100_000,
        down_payment_percent=0,
        closing_costs_percent=0,
        mortgage_rate=5,
        monthly_rent=5_000,
        vacancy_rate=0,
        operating_expense_percent=0,
    )
    res = calculate_simulation(params)
    assert res.summary.total_out_of_pocket == 0
    assert math.isinf(res.summary.re_roi) and res.summary.re_roi > 0
    assert math.isnan(res.summary.index_roi)


def test_pathological_inputs_do_not_raise():
    res = calculate_simulation(SimulationParams(mortgage_rate=-1.0))
    assert len(res.data) == 25
    res = calculate_simulation(SimulationParams(mortgage_rate=0.0))
    assert math.isfinite(res.summary.re_roi)
    res = calculate_simulation(SimulationParams(amortization_years=0))
    assert res.data == ()
    assert math.isnan(res.summary.total_re_net_worth)
