from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

import pandas as pd


MONTHS_IN_YEAR: Final[int] = 12


def canadian_monthly_rate(annual_rate_pct: float) -> float:
    """Convert a nominal annual mortgage rate (percent) to an effective monthly rate.

    Canadian mortgages compound semi-annually while payments are monthly:
    r_m = (1 + r/2)^(2/12) - 1

    Returns NaN when 1 + r/2 <= 0 (the fractional power is undefined).
    """
    base = 1.0 + (float(annual_rate_pct) / 100.0) / 2.0
    if base <= 0:
        return math.nan
    return base ** (2.0 / MONTHS_IN_YEAR) - 1.0


def fixed_monthly_payment(principal: float, monthly_rate: float, n_payments: int) -> float:
    """Compute the level monthly payment for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Initial loan amount.
    monthly_rate : float
        Effective monthly rate as a decimal.
    n_payments : int
        Number of monthly payments.

    Returns
    -------
    float
        The constant monthly payment.
    """
    if n_payments <= 0:
        return 0.0
    if monthly_rate == 0:
        return principal / n_payments
    factor = (1 + monthly_rate) ** n_payments
    return principal * (monthly_rate * factor) / (factor - 1)


def principal_for_payment(payment: float, monthly_rate: float, n_payments: int) -> float:
    """Inverse of the annuity formula: the principal a given level payment retires."""
    if n_payments <= 0:
        return 0.0
    if monthly_rate == 0:
        return payment * n_payments
    factor = (1 + monthly_rate) ** n_payments
    return payment * (factor - 1) / (monthly_rate * factor)


@dataclass(frozen=True)
class MortgageTerms:
    principal: float
    monthly_rate: float
    payment: float
    n_payments: int

    @classmethod
    def from_params(cls, params) -> "MortgageTerms":
        down_payment = params.purchase_price * (params.down_payment_percent / 100)
        principal = params.purchase_price - down_payment
        monthly_rate = canadian_monthly_rate(params.mortgage_rate)
        n_payments = int(params.amortization_years) * MONTHS_IN_YEAR
        return cls(
            principal=principal,
            monthly_rate=monthly_rate,
            payment=fixed_monthly_payment(principal, monthly_rate, n_payments),
            n_payments=n_payments,
        )


def amort_schedule(terms: MortgageTerms) -> pd.DataFrame:
    """Generate a monthly amortization schedule.

    Columns: month (1..N), year, payment, interest, principal, balance

    Notes
    -----
    - The payment is held constant for the life of the loan.
    - Floating-point residue on the last period is folded into its principal
      so the schedule ends on a zero balance.
    """
    columns = ["month", "year", "payment", "interest", "principal", "balance"]
    if terms.n_payments <= 0:
        return pd.DataFrame(columns=columns, data=[])

    rows = []
    balance = float(terms.principal)
    residue = 1e-6 * max(1.0, abs(balance))
    for m in range(1, terms.n_payments + 1):
        interest = balance * terms.monthly_rate
        principal_component = terms.payment - interest
        new_balance = balance - principal_component

        if m == terms.n_payments and abs(new_balance) < residue:
            principal_component += new_balance
            new_balance = 0.0

        rows.append(
            {
                "month": m,
                "year": (m - 1) // MONTHS_IN_YEAR + 1,
                "payment": float(terms.payment),
                "interest": float(interest),
                "principal": float(principal_component),
                "balance": float(max(new_balance, 0.0)),
            }
        )
        balance = max(new_balance, 0.0)

    return pd.DataFrame(rows, columns=columns)


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization schedule by year.

    Returns a DataFrame with columns: year, payment, interest, principal, end_balance
    """
    if schedule.empty:
        return pd.DataFrame(
            columns=["year", "payment", "interest", "principal", "end_balance"],
            data=[],
        )

    agg = (
        schedule.groupby("year", as_index=False)[["payment", "interest", "principal"]]
        .sum()
        .sort_values("year")
    )
    end_balances = (
        schedule.groupby("year", as_index=False)["balance"].last().rename(columns={"balance": "end_balance"})
    )
    return agg.merge(end_balances, on="year", how="left")


@dataclass(frozen=True)
class AmortizationSummary:
    terms: MortgageTerms
    schedule_monthly: pd.DataFrame
    schedule_yearly: pd.DataFrame

    @property
    def payment_monthly(self) -> float:
        return self.terms.payment


def summarize(terms: MortgageTerms) -> AmortizationSummary:
    """Convenience wrapper returning the terms and both schedules."""
    schedule = amort_schedule(terms)
    return AmortizationSummary(
        terms=terms,
        schedule_monthly=schedule,
        schedule_yearly=aggregate_yearly(schedule),
    )
