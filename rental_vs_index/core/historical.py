"""Hardcoded Canadian housing market history (1975-2025) used as autofill defaults."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional

from .model import SimulationParams


@dataclass(frozen=True)
class HistoricalMetric:
    value: float
    source: str
    reason: str


HISTORICAL_DATA: Dict[str, HistoricalMetric] = {
    "purchase_price": HistoricalMetric(
        682_000, "CREA National Average (Nov 2025)",
        "Home prices cooled down to $682k after the 2022 frenzy.",
    ),
    "down_payment_percent": HistoricalMetric(
        20, "Standard Canadian Mortgage Requirements",
        "20% avoids paying extra for mortgage default insurance.",
    ),
    "mortgage_rate": HistoricalMetric(
        4.5, "2025 Bank of Canada Policy Rate",
        "Rates have settled around 4.5% after the recent hikes.",
    ),
    "closing_costs_percent": HistoricalMetric(
        1.5, "Ontario Land Transfer Tax + Legal Fees",
        "Land transfer tax and lawyer fees are paid upfront.",
    ),
    "amortization_years": HistoricalMetric(
        25, "Standard Canadian Amortization",
        "25 years is the standard timeline to be mortgage-free.",
    ),
    "monthly_rent": HistoricalMetric(
        2_127, "Rentals.ca & CMHC 2025 Market Report",
        "Asking rent for a new lease, not a grandfathered one.",
    ),
    "vacancy_rate": HistoricalMetric(
        3.1, "CMHC 2025 National Vacancy Rate",
        "Vacancies are up slightly from the post-pandemic lows.",
    ),
    "utilities_monthly": HistoricalMetric(
        0, "Tenant-Paid Standard",
        "Assume 0 unless the landlord pays heat or hydro.",
    ),
    "operating_expense_percent": HistoricalMetric(
        15, "Industry Standard (Property Tax, Maintenance, Insurance, Management)",
        "Taxes, repairs and insurance typically run about 15% of rent.",
    ),
    "property_appreciation": HistoricalMetric(
        5.4, "50-Year CAGR (1975-2025)",
        "Canadian home values grew about 5.4% per year over 50 years.",
    ),
    "rent_increase": HistoricalMetric(
        5.8, "50-Year Market Rent CAGR",
        "Market rents grew about 5.8% per year over 50 years.",
    ),
    "index_return": HistoricalMetric(
        9.0, "Historical S&P 500 Average Return",
        "Broad US equities returned 9-10% per year over the long run.",
    ),
    "expense_inflation": HistoricalMetric(
        3.2, "50-Year Average CPI",
        "Consumer prices rose about 3.2% per year on average.",
    ),
}


RESEARCH_SUMMARY: Dict[str, object] = {
    "title": "What History Tells Us: 50 Years of Canadian Housing Data (1975-2025)",
    "key_findings": [
        {"label": "Home Values Soar", "value": "5.4% Yearly Growth",
         "detail": "Average homes went from $52k in 1975 to $682k today."},
        {"label": "Rents Skyrocket", "value": "5.8% Yearly Growth",
         "detail": "Average rent went from $120/month to over $2,100."},
        {"label": "Affordability Crisis", "value": "Much Harder Now",
         "detail": "A home now costs about 7x the average income, versus 3x in 1975."},
        {"label": "Beats Inflation", "value": "Real Winner",
         "detail": "Real estate has consistently outpaced inflation."},
    ],
    "historical_milestones": [
        (1975, "Baseline: $52k average home, $120/month rent, 10-11% mortgage rates"),
        (1981, "Interest rate shock: 21.75% mortgage rates caused severe correction"),
        (1989, "Toronto bubble peak: GTA prices nearly doubled to $273k, then crashed"),
        (2008, "Financial crisis: prices dipped briefly then recovered"),
        (2022, "Post-pandemic peak: national average exceeded $800k before correction"),
        (2025, "Stabilization: $682k national average, 3.1% vacancy rate"),
    ],
    "sources": [
        ("Statistics Canada", "https://www.statcan.gc.ca"),
        ("CMHC Rental Market Report 2025", "https://www.cmhc-schl.gc.ca"),
        ("CREA Housing Market Data", "https://www.crea.ca"),
        ("Rentals.ca Rent Reports", "https://rentals.ca"),
        ("WOWA Canada Mortgage Rates History", "https://wowa.ca"),
        ("Bank of Canada Historical Rates", "https://www.bankofcanada.ca"),
    ],
}


def historical_values() -> Dict[str, float]:
    return {name: metric.value for name, metric in HISTORICAL_DATA.items()}


def historical_params(base: Optional[SimulationParams] = None) -> SimulationParams:
    """Return `base` (or the defaults) with every historical value filled in."""
    values = historical_values()
    values["amortization_years"] = int(values["amortization_years"])
    return replace(base or SimulationParams(), **values)


def metric_help(name: str) -> Optional[str]:
    metric = HISTORICAL_DATA.get(name)
    if metric is None:
        return None
    return f"Historical: {metric.value:g} ({metric.source}). {metric.reason}"


def milestones() -> List[str]:
    return [f"{year}: {event}" for year, event in RESEARCH_SUMMARY["historical_milestones"]]  # type: ignore[union-attr]
