from __future__ import annotations

import math
from typing import Any

NOT_AVAILABLE = "—"


def is_finite(value: Any) -> bool:
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def dollar(value: float, cents: bool = False) -> str:
    if not is_finite(value):
        return NOT_AVAILABLE
    sign = "-" if value < 0 else ""
    digits = 2 if cents else 0
    return f"{sign}${abs(value):,.{digits}f}"


def percent(value: float, digits: int = 1) -> str:
    """Format a value already in percent units, e.g. 4.8 -> '4.8%'."""
    if not is_finite(value):
        return NOT_AVAILABLE
    text = f"{value:,.{digits}f}"
    if digits and "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}%"
