"""
Filter state for the two facet selectors and the pure filter applied to the
listings frame on every recompute.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from house_sales.config import ALL_STATUSES


@dataclass
class FilterState:
    property_type: Optional[str]
    status: str = ALL_STATUSES


@dataclass(frozen=True)
class FilterDomains:
    """Precomputed selector domains; statuses always start with "All"."""

    property_types: Tuple[str, ...]
    statuses: Tuple[str, ...]

    @classmethod
    def from_listings(cls, listings: pd.DataFrame) -> "FilterDomains":
        if listings.empty:
            return cls(property_types=(), statuses=(ALL_STATUSES,))
        property_types = tuple(sorted(listings["property_type"].unique().tolist()))
        # Statuses keep first-encounter order after the "All" sentinel
        statuses = tuple(s for s in pd.unique(listings["status"]) if s != ALL_STATUSES)
        return cls(property_types=property_types, statuses=(ALL_STATUSES,) + statuses)

    def default_state(self) -> FilterState:
        default_type = self.property_types[0] if self.property_types else None
        return FilterState(property_type=default_type, status=ALL_STATUSES)

    def accepts_property_type(self, value: Any) -> bool:
        return value in self.property_types

    def accepts_status(self, value: Any) -> bool:
        return value in self.statuses


def apply_filters(listings: pd.DataFrame, state: FilterState) -> pd.DataFrame:
    """
    Exact property-type match, then exact status match unless the status
    selection is "All". Never mutates the input frame.
    """
    if listings.empty:
        return listings.copy()
    filtered = listings[listings["property_type"] == state.property_type]
    if state.status != ALL_STATUSES:
        filtered = filtered[filtered["status"] == state.status]
    filtered = filtered.reset_index(drop=True)
    filtered.attrs["applied_filters"] = serialize_filters(state)
    return filtered


def serialize_filters(state: FilterState) -> Dict[str, Any]:
    """
    Convert the FilterState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "property_type": state.property_type,
        "status": state.status,
    }
