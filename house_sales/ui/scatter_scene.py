"""
Scatter scene: one point per filtered listing at (area, price), colored by
region, with a hover-driven legend highlight and a callout annotation on
the most expensive emphasized listing.

Highlight state machine (two states, fully reversible):

    legend hover(region)  -> selection = region
    legend leave          -> selection = "All"

Each change restyles every point and replaces the annotation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, List, Optional, Tuple

import pandas as pd

from house_sales.config import (
    ALL_HIGHLIGHT,
    ALL_REGIONS_LABEL,
    ANNOTATION_DX,
    ANNOTATION_DY,
    ANNOTATION_WRAP,
    DEEMPHASIZED_POINT,
    EMPHASIZED_POINT,
    HIGHLIGHT_TRANSITION_MS,
    HOVER_FILL,
    LEGEND_ALL_SWATCH,
    SCATTER_LAYOUT,
    ChartLayout,
    PointStyle,
)
from house_sales.data.pipeline import RecomputeResult
from house_sales.ui.components.formatting import (
    format_currency,
    format_grouped,
    format_si,
    format_text,
)
from house_sales.ui.scales import LinearScale, LogScale, RegionPalette, build_linear_scale, build_log_scale
from house_sales.ui.scene import JoinResult, Primitive, Scene
from house_sales.ui.tooltip import Pointer, Tooltip


@dataclass(frozen=True)
class LegendEntry:
    label: str
    region: str
    color: str


@dataclass(frozen=True)
class Annotation:
    target: Hashable
    x: float
    y: float
    dx: int
    dy: int
    title: str
    label: str
    wrap: int = ANNOTATION_WRAP


def point_tooltip_rows(listing) -> Tuple[str, List[Tuple[str, str]]]:
    title = f"{listing.city}, {listing.region}"
    rows = [
        ("Price", format_currency(listing.price)),
        ("Area", f"{format_grouped(listing.area)} sqft"),
        ("Price/Sqft", format_currency(listing.price / listing.area, decimals=2)),
        ("Beds", format_text(listing.bedrooms)),
        ("Baths", format_text(listing.bathrooms)),
        ("Year Built", format_text(listing.year_built)),
    ]
    return title, rows


def is_emphasized(region: str, selection: str) -> bool:
    return selection == ALL_HIGHLIGHT or region == selection


class ScatterScene:
    def __init__(self, palette: RegionPalette, layout: ChartLayout = SCATTER_LAYOUT) -> None:
        self.palette = palette
        self.layout = layout
        self.scene = Scene("circle")
        self.x: Optional[LinearScale] = None
        self.y: Optional[LogScale] = None
        self.legend: List[LegendEntry] = []
        self.selection: str = ALL_HIGHLIGHT
        self.annotation: Optional[Annotation] = None
        self.hovered: Optional[Hashable] = None
        self.tooltip = Tooltip()

    # ------------------------------------------------------------------
    # Data binding
    # ------------------------------------------------------------------
    def on_recompute(self, result: RecomputeResult) -> JoinResult:
        return self.render(result.filtered)

    def render(self, filtered: pd.DataFrame) -> JoinResult:
        self.x = build_linear_scale(filtered["area"], (0.0, float(self.layout.inner_width)))
        self.y = build_log_scale(filtered["price"], (float(self.layout.inner_height), 0.0))
        regions = sorted(filtered["region"].unique().tolist()) if not filtered.empty else []
        self.legend = [LegendEntry(ALL_REGIONS_LABEL, ALL_HIGHLIGHT, LEGEND_ALL_SWATCH)] + [
            LegendEntry(region, region, self.palette(region)) for region in regions
        ]
        self.hovered = None
        self.tooltip.hide()
        data = [(row.listing_id, row) for row in filtered.itertuples(index=False)]
        result = self.scene.join(data, enter=self._enter, update=self._bind)
        self.set_highlight(ALL_HIGHLIGHT)
        return result

    def _bind(self, primitive: Primitive) -> None:
        listing = primitive.datum
        primitive.set(
            cx=self.x(listing.area),
            cy=self.y(listing.price),
            fill=self.palette(listing.region),
        )

    def _enter(self, primitive: Primitive) -> None:
        self._bind(primitive)
        primitive.set(opacity=EMPHASIZED_POINT.opacity, r=EMPHASIZED_POINT.radius)

    # ------------------------------------------------------------------
    # Legend highlight
    # ------------------------------------------------------------------
    def legend_enter(self, region: str) -> None:
        self.set_highlight(region)

    def legend_leave(self) -> None:
        self.set_highlight(ALL_HIGHLIGHT)

    def style_for(self, region: str) -> PointStyle:
        return EMPHASIZED_POINT if is_emphasized(region, self.selection) else DEEMPHASIZED_POINT

    def set_highlight(self, selection: str) -> Optional[Annotation]:
        self.selection = selection
        for primitive in self.scene.primitives():
            style = self.style_for(primitive.datum.region)
            primitive.animate({"opacity": style.opacity, "r": style.radius}, HIGHLIGHT_TRANSITION_MS)
        self.annotation = self._annotate()
        return self.annotation

    def emphasized(self) -> List[Primitive]:
        return [p for p in self.scene.primitives() if is_emphasized(p.datum.region, self.selection)]

    def _annotate(self) -> Optional[Annotation]:
        candidates = self.emphasized()
        if not candidates:
            return None
        # Ties keep the earliest listing
        top = max(sorted(candidates, key=lambda p: p.datum.listing_id), key=lambda p: p.datum.price)
        listing = top.datum
        midpoint = self.x.domain[1] / 2
        return Annotation(
            target=top.key,
            x=self.x(listing.area),
            y=self.y(listing.price),
            dx=-ANNOTATION_DX if listing.area > midpoint else ANNOTATION_DX,
            dy=ANNOTATION_DY,
            title=f"Most Expensive: ${format_si(listing.price)}",
            label=f"{format_grouped(listing.area)} sqft in {listing.city}",
        )

    # ------------------------------------------------------------------
    # Point hover
    # ------------------------------------------------------------------
    def hover_point(self, key: Hashable, pointer: Optional[Pointer] = None) -> Tooltip:
        if self.hovered is not None and self.hovered != key and self.hovered in self.scene:
            self.leave_point(self.hovered)
        primitive = self.scene[key]
        primitive.set(fill=HOVER_FILL)
        self.scene.raise_to_top(key)
        self.hovered = key
        title, rows = point_tooltip_rows(primitive.datum)
        self.tooltip.show(title, rows, pointer)
        return self.tooltip

    def leave_point(self, key: Hashable) -> Tooltip:
        if key in self.scene:
            primitive = self.scene[key]
            primitive.set(fill=self.palette(primitive.datum.region))
        if self.hovered == key:
            self.hovered = None
        self.tooltip.hide()
        return self.tooltip

    def points(self) -> List[Primitive]:
        return self.scene.primitives()
