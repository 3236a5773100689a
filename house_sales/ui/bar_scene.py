"""
Bar scene: one horizontal bar per region, length proportional to the mean
price, keyed by region across recomputes.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import pandas as pd

from house_sales.config import BAR_LAYOUT, BAR_TRANSITION_MS, ChartLayout
from house_sales.data.pipeline import RecomputeResult
from house_sales.ui.components.formatting import format_currency, format_number
from house_sales.ui.scales import BandScale, LinearScale, RegionPalette, build_band_scale, build_linear_scale
from house_sales.ui.scene import JoinResult, Primitive, Scene
from house_sales.ui.tooltip import Pointer, Tooltip


def bar_tooltip_rows(region: str, mean_price: float, listing_count: int) -> Tuple[str, List[Tuple[str, str]]]:
    return region, [
        ("Avg. Price", format_currency(mean_price)),
        ("Listings", format_number(listing_count)),
    ]


class BarScene:
    def __init__(self, palette: RegionPalette, layout: ChartLayout = BAR_LAYOUT) -> None:
        self.palette = palette
        self.layout = layout
        self.scene = Scene("rect")
        self.x: Optional[LinearScale] = None
        self.y: Optional[BandScale] = None
        self.tooltip = Tooltip()

    def on_recompute(self, result: RecomputeResult) -> JoinResult:
        return self.render(result.region_stats)

    def render(self, stats: pd.DataFrame) -> JoinResult:
        regions = stats["region"].tolist()
        self.x = build_linear_scale(stats["mean_price"], (0.0, float(self.layout.inner_width)))
        self.y = build_band_scale(regions, (0.0, float(self.layout.inner_height)))
        self.tooltip.hide()
        data = [(row.region, row) for row in stats.itertuples(index=False)]
        return self.scene.join(data, enter=self._enter, update=self._update)

    def _target(self, primitive: Primitive) -> dict:
        return {"width": self.x(primitive.datum.mean_price)}

    def _place(self, primitive: Primitive) -> None:
        primitive.set(
            x=0.0,
            y=self.y(primitive.key),
            height=self.y.bandwidth,
            fill=self.palette(primitive.key),
        )

    def _enter(self, primitive: Primitive) -> None:
        self._place(primitive)
        primitive.set(width=0.0)
        primitive.animate(self._target(primitive), BAR_TRANSITION_MS)

    def _update(self, primitive: Primitive) -> None:
        self._place(primitive)
        primitive.animate(self._target(primitive), BAR_TRANSITION_MS)

    def bars(self) -> List[Primitive]:
        return self.scene.primitives()

    def hover(self, region: str, pointer: Optional[Pointer] = None) -> Tooltip:
        datum = self.scene[region].datum
        title, rows = bar_tooltip_rows(datum.region, datum.mean_price, datum.listing_count)
        self.tooltip.show(title, rows, pointer)
        return self.tooltip

    def leave(self) -> Tooltip:
        self.tooltip.hide()
        return self.tooltip
