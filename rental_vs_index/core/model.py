from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields, replace
from typing import List, Tuple

import pandas as pd

from .amortization import MONTHS_IN_YEAR, MortgageTerms
from .cashflow import MonthlyCashFlow, monthly_cash_flow

'''
Rental property vs index fund.

Every month the rental either throws off a surplus, which is swept into an
index portfolio, or needs a top-up. A top-up is fresh money: it is counted
as out-of-pocket cash for the rental and the same amount is invested in the
index-only alternative, so both strategies receive identical contributions.
'''

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationParams:
    # Purchase
    purchase_price: float = 750_000.0
    down_payment_percent: float = 20.0
    closing_costs_percent: float = 1.5  # land transfer tax + legal

    # Mortgage (nominal annual rate, compounded semi-annually)
    mortgage_rate: float = 4.8
    amortization_years: int = 25

    # Rental
    monthly_rent: float = 3_850.0
    operating_expense_percent: float = 15.0  # % of gross rent: tax, maintenance, insurance, management
    utilities_monthly: float = 0.0
    vacancy_rate: float = 5.0

    # Growth
    property_appreciation: float = 4.5
    rent_increase: float = 2.5
    expense_inflation: float = 2.0  # fixed costs only

    # Alternative
    index_return: float = 9.0

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @property
    def down_payment(self) -> float:
        return self.purchase_price * (self.down_payment_percent / 100)

    @property
    def closing_costs(self) -> float:
        return self.purchase_price * (self.closing_costs_percent / 100)

    @property
    def initial_cash_outlay(self) -> float:
        return self.down_payment + self.closing_costs


@dataclass(frozen=True)
class YearData:
    year: int
    property_value: float
    mortgage_balance: float
    equity: float
    accumulated_cash_flow: float
    re_net_worth: float
    index_investment_value: float
    index_net_worth: float
    index_contributions: float
    annual_cash_flow: float
    total_invested: float


@dataclass(frozen=True)
class SimulationSummary:
    total_re_net_worth: float
    total_index_net_worth: float
    initial_investment: float
    total_out_of_pocket: float
    re_roi: float
    index_roi: float


@dataclass(frozen=True)
class SimulationResult:
    data: Tuple[YearData, ...]
    summary: SimulationSummary

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [asdict(row) for row in self.data],
            columns=[f.name for f in fields(YearData)],
        )


@dataclass(frozen=True)
class SimulationState:
    property_value: float
    mortgage_balance: float
    gross_rent: float
    utilities: float
    accumulated_portfolio: float
    index_investment: float
    index_contributions: float
    total_out_of_pocket: float

    @classmethod
    def initial(cls, params: SimulationParams, terms: MortgageTerms) -> "SimulationState":
        outlay = params.initial_cash_outlay
        return cls(
            property_value=params.purchase_price,
            mortgage_balance=terms.principal,
            gross_rent=params.monthly_rent,
            utilities=params.utilities_monthly,
            accumulated_portfolio=0.0,
            index_investment=outlay,
            index_contributions=outlay,
            total_out_of_pocket=outlay,
        )


def monthly_index_growth(index_return: float) -> float:
    return 1 + index_return / 100 / MONTHS_IN_YEAR


def step_month(
    state: SimulationState, params: SimulationParams, terms: MortgageTerms
) -> Tuple[SimulationState, MonthlyCashFlow]:
    """Advance the simulation by one month.

    The level payment is always part of the outflow; the balance only moves
    while it is positive and never drops below zero.
    """
    month = monthly_cash_flow(
        gross_rent=state.gross_rent,
        utilities=state.utilities,
        mortgage_payment=terms.payment,
        vacancy_rate=params.vacancy_rate,
        operating_expense_percent=params.operating_expense_percent,
    )

    balance = state.mortgage_balance
    if balance > 0:
        interest = balance * terms.monthly_rate
        balance = max(balance - (terms.payment - interest), 0.0)

    growth = monthly_index_growth(params.index_return)
    portfolio = state.accumulated_portfolio
    index_investment = state.index_investment
    contributions = state.index_contributions
    out_of_pocket = state.total_out_of_pocket

    cash_flow = month.cash_flow
    if cash_flow > 0:
        portfolio = (portfolio + cash_flow) * growth
    else:
        deficit = abs(cash_flow)
        out_of_pocket += deficit
        index_investment += deficit
        contributions += deficit

    index_investment *= growth

    new_state = replace(
        state,
        mortgage_balance=balance,
        accumulated_portfolio=portfolio,
        index_investment=index_investment,
        index_contributions=contributions,
        total_out_of_pocket=out_of_pocket,
    )
    return new_state, month


def end_of_year(state: SimulationState, params: SimulationParams) -> SimulationState:
    """Apply the yearly appreciation, rent increase and fixed-cost inflation."""
    return replace(
        state,
        property_value=state.property_value * (1 + params.property_appreciation / 100),
        gross_rent=state.gross_rent * (1 + params.rent_increase / 100),
        utilities=state.utilities * (1 + params.expense_inflation / 100),
    )


def snapshot(year: int, state: SimulationState, annual_cash_flow: float) -> YearData:
    equity = state.property_value - state.mortgage_balance
    return YearData(
        year=year,
        property_value=state.property_value,
        mortgage_balance=state.mortgage_balance,
        equity=equity,
        accumulated_cash_flow=state.accumulated_portfolio,
        re_net_worth=equity + state.accumulated_portfolio,
        index_investment_value=state.index_investment,
        index_net_worth=state.index_investment,
        index_contributions=state.index_contributions,
        annual_cash_flow=annual_cash_flow,
        total_invested=state.total_out_of_pocket,
    )


def roi_percent(final_value: float, invested: float) -> float:
    """(final - invested) / invested * 100, left non-finite when nothing was invested."""
    gain = final_value - invested
    if invested == 0:
        if gain == 0 or math.isnan(gain):
            return math.nan
        return math.copysign(math.inf, gain)
    return gain / invested * 100


def calculate_simulation(params: SimulationParams) -> SimulationResult:
    """Project both strategies year by year over the amortization term."""
    terms = MortgageTerms.from_params(params)
    logger.debug(
        "Mortgage terms: principal=%.2f monthly_rate=%.6f payment=%.2f n=%d",
        terms.principal,
        terms.monthly_rate,
        terms.payment,
        terms.n_payments,
    )

    state = SimulationState.initial(params, terms)
    data: List[YearData] = []
    for year in range(1, int(params.amortization_years) + 1):
        annual_cash_flow = 0.0
        for _ in range(MONTHS_IN_YEAR):
            state, month = step_month(state, params, terms)
            annual_cash_flow += month.cash_flow
        state = end_of_year(state, params)
        data.append(snapshot(year, state, annual_cash_flow))

    if data:
        final_re = data[-1].re_net_worth
        final_index = data[-1].index_net_worth
    else:
        final_re = final_index = math.nan

    out_of_pocket = state.total_out_of_pocket
    re_roi = roi_percent(final_re, out_of_pocket)
    # Both strategies are measured against the rental's out-of-pocket cash.
    index_roi = roi_percent(final_index, out_of_pocket)
    if not (math.isfinite(re_roi) and math.isfinite(index_roi)):
        logger.debug("Non-finite ROI (out_of_pocket=%r)", out_of_pocket)

    summary = SimulationSummary(
        total_re_net_worth=final_re,
        total_index_net_worth=final_index,
        initial_investment=params.initial_cash_outlay,
        total_out_of_pocket=out_of_pocket,
        re_roi=re_roi,
        index_roi=index_roi,
    )
    return SimulationResult(data=tuple(data), summary=summary)
