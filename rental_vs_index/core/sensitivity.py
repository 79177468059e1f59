from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from .model import SimulationParams, calculate_simulation

# Parameters worth sweeping, with the half-width of the default range (percent points).
SWEEPABLE: Dict[str, float] = {
    "mortgage_rate": 2.0,
    "property_appreciation": 2.0,
    "index_return": 2.0,
    "rent_increase": 2.0,
    "down_payment_percent": 10.0,
    "vacancy_rate": 5.0,
    "operating_expense_percent": 10.0,
}


def default_range(params: SimulationParams, name: str, points: int = 9) -> List[float]:
    """Evenly spaced values around the current one, never below zero."""
    current = float(getattr(params, name))
    spread = SWEEPABLE.get(name, 2.0)
    low = max(0.0, current - spread)
    high = current + spread
    return np.linspace(low, high, points).tolist()


def sweep(params: SimulationParams, name: str, values: Iterable[float]) -> pd.DataFrame:
    """Re-run the projection for each value of one parameter.

    Columns: value, re_net_worth, index_net_worth, delta, re_roi, index_roi
    """
    rows = []
    for value in values:
        summary = calculate_simulation(replace(params, **{name: float(value)})).summary
        rows.append(
            {
                "value": float(value),
                "re_net_worth": summary.total_re_net_worth,
                "index_net_worth": summary.total_index_net_worth,
                "delta": summary.total_re_net_worth - summary.total_index_net_worth,
                "re_roi": summary.re_roi,
                "index_roi": summary.index_roi,
            }
        )
    return pd.DataFrame(
        rows, columns=["value", "re_net_worth", "index_net_worth", "delta", "re_roi", "index_roi"]
    )
