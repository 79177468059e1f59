from __future__ import annotations

import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = BASE_DIR / "config.yaml"


def _load_yaml(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml()

# All rates below stay in percent units (4.8 means 4.8%).

# Purchase
PURCHASE_PRICE: float = float(CFG.get("purchase_price", 750_000))
DOWN_PAYMENT_PERCENT: float = float(CFG.get("down_payment_percent", 20.0))
CLOSING_COSTS_PERCENT: float = float(CFG.get("closing_costs_percent", 1.5))

# Mortgage
MORTGAGE_RATE: float = float(CFG.get("mortgage_rate", 4.8))
AMORTIZATION_YEARS: int = int(CFG.get("amortization_years", 25))

# Rental
MONTHLY_RENT: float = float(CFG.get("monthly_rent", 3_850))
OPERATING_EXPENSE_PERCENT: float = float(CFG.get("operating_expense_percent", 15.0))
UTILITIES_MONTHLY: float = float(CFG.get("utilities_monthly", 0.0))
VACANCY_RATE: float = float(CFG.get("vacancy_rate", 5.0))

# Growth
PROPERTY_APPRECIATION: float = float(CFG.get("property_appreciation", 4.5))
RENT_INCREASE: float = float(CFG.get("rent_increase", 2.5))
EXPENSE_INFLATION: float = float(CFG.get("expense_inflation", 2.0))

# Alternative
INDEX_RETURN: float = float(CFG.get("index_return", 9.0))

# Runtime
LOG_LEVEL: str = str(CFG.get("log_level", "INFO")).upper()


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
