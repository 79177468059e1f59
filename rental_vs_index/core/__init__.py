from .amortization import (
	MortgageTerms,
	amort_schedule,
	aggregate_yearly,
	canadian_monthly_rate,
	fixed_monthly_payment,
	principal_for_payment,
	summarize,
)
from .cashflow import MonthlyCashFlow, monthly_cash_flow
from .model import (
	SimulationParams,
	SimulationResult,
	SimulationState,
	SimulationSummary,
	YearData,
	calculate_simulation,
	step_month,
)
from .solver import (
	BreakEvenAnalysis,
	BreakEvenValue,
	analyze_break_even,
	solve_break_even_down_payment,
	solve_break_even_rent,
)
from .utils import dollar, percent, is_finite

__all__ = [
	"MortgageTerms",
	"amort_schedule",
	"aggregate_yearly",
	"canadian_monthly_rate",
	"fixed_monthly_payment",
	"principal_for_payment",
	"summarize",
	"MonthlyCashFlow",
	"monthly_cash_flow",
	"SimulationParams",
	"SimulationResult",
	"SimulationState",
	"SimulationSummary",
	"YearData",
	"calculate_simulation",
	"step_month",
	"BreakEvenAnalysis",
	"BreakEvenValue",
	"analyze_break_even",
	"solve_break_even_down_payment",
	"solve_break_even_rent",
	"dollar",
	"percent",
	"is_finite",
]
