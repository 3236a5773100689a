"""
Utility helpers for formatting numeric values, currency strings and
SI-abbreviated amounts for tooltips, axes and annotations.
"""

from __future__ import annotations

import math
from typing import Any, Optional

import pandas as pd

SI_PREFIXES = {
    -2: "µ",
    -1: "m",
    0: "",
    1: "k",
    2: "M",
    3: "G",
    4: "T",
}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if _is_missing(value):
        return "–"
    try:
        return f"{float(value):,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_grouped(value: Optional[float]) -> str:
    """Thousands-grouped, keeping decimals only when the value has them."""
    if _is_missing(value):
        return "–"
    numeric = float(value)
    if numeric.is_integer():
        return f"{numeric:,.0f}"
    return f"{numeric:,}"


def format_currency(value: Optional[float], symbol: str = "$", decimals: int = 0) -> str:
    if _is_missing(value):
        return "–"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return "–"
    return f"{symbol}{numeric:,.{decimals}f}"


def format_si(value: Optional[float], significant: int = 2) -> str:
    """Round to `significant` digits and attach an SI suffix: 500000 -> "500k"."""
    if _is_missing(value):
        return "–"
    numeric = float(value)
    if numeric == 0:
        return "0"
    rounded = float(f"{numeric:.{significant}g}")
    exponent = math.floor(math.log10(abs(rounded)))
    tier = max(min(exponent // 3, max(SI_PREFIXES)), min(SI_PREFIXES))
    scaled = rounded / 10 ** (3 * tier)
    decimals = max(0, significant - 1 - (exponent - 3 * tier))
    return f"{scaled:.{decimals}f}{SI_PREFIXES[tier]}"


def format_thousands_tick(value: float) -> str:
    """Bar axis tick: 250000 -> "$250k"."""
    return f"${format_grouped(value / 1000)}k"


def format_text(value: Any) -> str:
    return "–" if _is_missing(value) else str(value)
