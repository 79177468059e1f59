from __future__ import annotations

import logging
from dataclasses import dataclass

from .amortization import MortgageTerms, principal_for_payment
from .cashflow import MonthlyCashFlow, monthly_cash_flow
from .model import SimulationParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BreakEvenValue:
    value: float
    solvable: bool


@dataclass(frozen=True)
class MonthlyBreakdown:
    """Year-one, month-one view of the rental."""

    loan_amount: float
    mortgage_payment: float
    interest: float
    principal: float
    cash: MonthlyCashFlow

    @property
    def cash_flow(self) -> float:
        return self.cash.cash_flow

    @property
    def annual_cash_flow(self) -> float:
        return self.cash.cash_flow * 12


@dataclass(frozen=True)
class BreakEvenAnalysis:
    breakdown: MonthlyBreakdown
    rent: BreakEvenValue
    down_payment_percent: BreakEvenValue


def first_month_cash_flow(params: SimulationParams, terms: MortgageTerms) -> MonthlyCashFlow:
    return monthly_cash_flow(
        gross_rent=params.monthly_rent,
        utilities=params.utilities_monthly,
        mortgage_payment=terms.payment,
        vacancy_rate=params.vacancy_rate,
        operating_expense_percent=params.operating_expense_percent,
    )


def first_month_breakdown(params: SimulationParams) -> MonthlyBreakdown:
    terms = MortgageTerms.from_params(params)
    interest = terms.principal * terms.monthly_rate
    return MonthlyBreakdown(
        loan_amount=terms.principal,
        mortgage_payment=terms.payment,
        interest=interest,
        principal=terms.payment - interest,
        cash=first_month_cash_flow(params, terms),
    )


def solve_break_even_rent(params: SimulationParams) -> BreakEvenValue:
    """Gross rent at which the first month's cash flow is zero.

    Cash flow is linear in rent:
        rent * (1 - vacancy - opex) - (fixed + payment) = 0
    No positive solution exists once vacancy and opex eat the whole rent.
    """
    terms = MortgageTerms.from_params(params)
    denominator = 1 - (params.vacancy_rate / 100) - (params.operating_expense_percent / 100)
    if not denominator > 0:
        logger.debug("Break-even rent unsolvable: vacancy + opex >= 100%%")
        return BreakEvenValue(value=0.0, solvable=False)
    return BreakEvenValue(
        value=(params.utilities_monthly + terms.payment) / denominator,
        solvable=True,
    )


def solve_break_even_down_payment(params: SimulationParams) -> BreakEvenValue:
    """Down payment (percent of price) at which the first month's cash flow is zero.

    Rent, vacancy, opex, utilities, rate and amortization stay fixed; the
    payment that zeroes the cash flow is turned back into a loan principal.
    """
    terms = MortgageTerms.from_params(params)
    cash = first_month_cash_flow(params, terms)
    target_payment = cash.effective_rent - cash.operating_expenses - cash.fixed_expenses
    if not target_payment > 0:
        logger.debug("Break-even down payment unsolvable: expenses exceed income without a mortgage")
        return BreakEvenValue(value=0.0, solvable=False)

    target_principal = principal_for_payment(target_payment, terms.monthly_rate, terms.n_payments)
    price = params.purchase_price
    if price == 0:
        return BreakEvenValue(value=0.0, solvable=False)
    percent = (price - target_principal) / price * 100
    if percent > 100:
        logger.debug("Break-even down payment unsolvable: %.1f%% of price", percent)
        return BreakEvenValue(value=percent, solvable=False)
    return BreakEvenValue(value=max(percent, 0.0), solvable=True)


def analyze_break_even(params: SimulationParams) -> BreakEvenAnalysis:
    return BreakEvenAnalysis(
        breakdown=first_month_breakdown(params),
        rent=solve_break_even_rent(params),
        down_payment_percent=solve_break_even_down_payment(params),
    )
