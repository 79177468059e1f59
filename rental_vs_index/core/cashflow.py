from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MonthlyCashFlow:
    gross_rent: float
    vacancy_loss: float
    effective_rent: float
    operating_expenses: float
    fixed_expenses: float
    mortgage_payment: float

    @property
    def total_outflow(self) -> float:
        return self.operating_expenses + self.fixed_expenses + self.mortgage_payment

    @property
    def cash_flow(self) -> float:
        return self.effective_rent - self.total_outflow


def monthly_cash_flow(
    gross_rent: float,
    utilities: float,
    mortgage_payment: float,
    vacancy_rate: float,
    operating_expense_percent: float,
) -> MonthlyCashFlow:
    """Cash flow of a single month of ownership.

    Operating expenses are a share of the *gross* rent (they cover property
    tax, maintenance, insurance and management); utilities are the only
    fixed expense. Percentages are in percent units.
    """
    vacancy_loss = gross_rent * (vacancy_rate / 100)
    return MonthlyCashFlow(
        gross_rent=gross_rent,
        vacancy_loss=vacancy_loss,
        effective_rent=gross_rent - vacancy_loss,
        operating_expenses=gross_rent * (operating_expense_percent / 100),
        fixed_expenses=utilities,
        mortgage_payment=mortgage_payment,
    )
