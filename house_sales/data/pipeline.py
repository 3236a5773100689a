"""
Recompute pipeline and the controller that owns the filter state.

`recompute` is a pure function of (listings, FilterState). The controller is
the only writer of the FilterState: each accepted selector event updates it,
reruns `recompute` synchronously and hands the result to every subscriber
(the scene renderers).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

import pandas as pd

from house_sales.data.aggregation import region_stats
from house_sales.data.filters import FilterDomains, FilterState, apply_filters, serialize_filters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecomputeResult:
    state: FilterState
    filtered: pd.DataFrame
    region_stats: pd.DataFrame


Subscriber = Callable[[RecomputeResult], None]


def recompute(listings: pd.DataFrame, state: FilterState) -> RecomputeResult:
    filtered = apply_filters(listings, state)
    stats = region_stats(filtered)
    logger.debug(
        "Recomputed %s: %d listings across %d regions",
        serialize_filters(state),
        len(filtered),
        len(stats),
    )
    return RecomputeResult(state=replace(state), filtered=filtered, region_stats=stats)


class DashboardController:
    def __init__(self, listings: pd.DataFrame, state: Optional[FilterState] = None) -> None:
        self.listings = listings
        self.domains = FilterDomains.from_listings(listings)
        self.state = state if state is not None else self.domains.default_state()
        self._subscribers: List[Subscriber] = []
        self.result = recompute(self.listings, self.state)

    def subscribe(self, subscriber: Subscriber, replay: bool = True) -> None:
        """Register a renderer; with `replay` it immediately receives the current result."""
        self._subscribers.append(subscriber)
        if replay:
            subscriber(self.result)

    def set_property_type(self, value: str) -> bool:
        if not self.domains.accepts_property_type(value):
            logger.warning("Ignoring property type outside the domain: %r", value)
            return False
        self.state.property_type = value
        self.refresh()
        return True

    def set_status(self, value: str) -> bool:
        if not self.domains.accepts_status(value):
            logger.warning("Ignoring status outside the domain: %r", value)
            return False
        self.state.status = value
        self.refresh()
        return True

    def refresh(self) -> RecomputeResult:
        self.result = recompute(self.listings, self.state)
        for subscriber in self._subscribers:
            subscriber(self.result)
        return self.result
