from __future__ import annotations

import json
import logging
import re
from dataclasses import replace
from typing import Dict, Optional, Tuple

from .model import SimulationParams, SimulationResult
from .utils import dollar

'''
Glue for an external text-generation service.

The service itself is a black box: prompts are handed to the user and the
answer comes back as text. A defaults answer that cannot be read parses to
None; values outside the input ranges are reported, not applied.
'''

logger = logging.getLogger(__name__)


# Keys the service answers with, mapped to SimulationParams fields.
RESPONSE_KEYS: Dict[str, str] = {
    "purchasePrice": "purchase_price",
    "downPaymentPercent": "down_payment_percent",
    "mortgageRate": "mortgage_rate",
    "amortizationYears": "amortization_years",
    "monthlyRent": "monthly_rent",
    "operatingExpensePercent": "operating_expense_percent",
    "utilitiesMonthly": "utilities_monthly",
    "vacancyRate": "vacancy_rate",
    "propertyAppreciation": "property_appreciation",
    "rentIncrease": "rent_increase",
    "expenseInflation": "expense_inflation",
    "sp500Return": "index_return",
    "closingCostsPercent": "closing_costs_percent",
}

# (min, max) accepted for each input; None means no upper limit.
INPUT_BOUNDS: Dict[str, Tuple[float, Optional[float]]] = {
    "purchase_price": (0.0, None),
    "down_payment_percent": (0.0, 100.0),
    "closing_costs_percent": (0.0, 20.0),
    "mortgage_rate": (0.0, 30.0),
    "amortization_years": (1, 40),
    "monthly_rent": (0.0, None),
    "vacancy_rate": (0.0, 100.0),
    "operating_expense_percent": (0.0, 100.0),
    "utilities_monthly": (0.0, None),
    "property_appreciation": (0.0, 20.0),
    "rent_increase": (0.0, 20.0),
    "expense_inflation": (0.0, 20.0),
    "index_return": (0.0, 30.0),
}

_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)


def build_insights_prompt(params: SimulationParams, result: SimulationResult) -> str:
    s = result.summary
    years = int(params.amortization_years)
    return f"""
Act as a senior real estate financial analyst for the Ontario, Canada market.
Analyze the following investment simulation comparison between a Single Family Rental and the S&P 500 over {years} years.

**Simulation Parameters:**
- Purchase Price: {dollar(params.purchase_price)}
- Down Payment: {params.down_payment_percent:g}%
- Mortgage Rate: {params.mortgage_rate:g}%
- Monthly Rent: {dollar(params.monthly_rent)}
- Operating Expenses (Inc. Tax): {params.operating_expense_percent:g}% of Rent
- Property Appreciation Used: {params.property_appreciation:g}%
- S&P 500 Return Used: {params.index_return:g}%
- Rent Increase: {params.rent_increase:g}% (Note: Ontario rent control cap is typically ~2.5%)

**Results (Year {years}):**
- Real Estate Total Net Worth: {dollar(s.total_re_net_worth)}
- S&P 500 Total Net Worth: {dollar(s.total_index_net_worth)}
- Initial Cash Invested: {dollar(s.initial_investment)}
- Total Cash Out of Pocket (Deficits covered): {dollar(s.total_out_of_pocket)}

**Task:**
Provide a concise, critical analysis (max 300 words).
1. Compare the ROI.
2. Highlight risks specific to Ontario (e.g., LTB delays, special assessments, interest rate renewals).
3. Comment on the liquidity difference between the two assets.
4. Conclude which strategy appears better based strictly on these numbers, but add a caveat about "active" vs "passive" investing.

Format using Markdown.
""".strip()


def build_defaults_prompt() -> str:
    return """
Provide realistic, current average financial parameters for a single-family starter home rental in Ontario, Canada for 2024/2025.
Return ONLY a valid JSON object with no markdown formatting.

Keys required:
- purchasePrice (number, e.g. 750000)
- monthlyRent (number, e.g. 2800)
- mortgageRate (number, e.g. 4.5)
- propertyAppreciation (number, historical avg ~5.5)
- sp500Return (number, conservative avg ~9)
- operatingExpensePercent (number, ~30 to include tax/maint/ins)

Do not include any text outside the JSON.
""".strip()


def parse_defaults_response(text: Optional[str]) -> Optional[Dict[str, float]]:
    """Best-effort parse of the service's JSON answer into SimulationParams fields.

    Markdown fences are stripped; unknown keys and non-numeric values are
    dropped. Returns None when the text is not a JSON object.
    """
    cleaned = _FENCE.sub("", text or "{}").strip()
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError:
        logger.warning("Advisory defaults response is not valid JSON")
        return None
    if not isinstance(payload, dict):
        logger.warning("Advisory defaults response is not a JSON object")
        return None

    overrides: Dict[str, float] = {}
    for key, value in payload.items():
        name = RESPONSE_KEYS.get(key, key if key in RESPONSE_KEYS.values() else None)
        if name is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        overrides[name] = value
    return overrides


def apply_overrides(params: SimulationParams, overrides: Optional[Dict[str, object]]) -> SimulationParams:
    """Merge a partial parameter set over `params`, ignoring anything unusable."""
    if not overrides:
        return params
    known = set(SimulationParams.field_names())
    clean: Dict[str, object] = {}
    for name, value in overrides.items():
        if name not in known or isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        clean[name] = int(value) if name == "amortization_years" else float(value)
    return replace(params, **clean)


def split_overrides(
    overrides: Dict[str, float],
    bounds: Dict[str, Tuple[float, Optional[float]]] = INPUT_BOUNDS,
) -> Tuple[Dict[str, float], Dict[str, float]]:
    """Separate overrides inside their (min, max) bounds from those outside.

    A max of None means unbounded above; fields without bounds are kept.
    """
    kept: Dict[str, float] = {}
    dropped: Dict[str, float] = {}
    for name, value in overrides.items():
        low, high = bounds.get(name, (None, None))
        if (low is not None and value < low) or (high is not None and value > high):
            dropped[name] = value
        else:
            kept[name] = value
    if dropped:
        logger.warning("Dropped out-of-range advisory values: %s", sorted(dropped))
    return kept, dropped
