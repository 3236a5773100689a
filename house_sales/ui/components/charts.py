"""
Plotly figure factories that draw the bar and scatter scenes with
consistent styling for the dashboard.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

import plotly.graph_objects as go
import streamlit as st

from house_sales.config import BAND_PADDING, CHART_THEME, ChartLayout
from house_sales.ui.bar_scene import BarScene, bar_tooltip_rows
from house_sales.ui.components.formatting import format_thousands_tick
from house_sales.ui.scatter_scene import ScatterScene, point_tooltip_rows
from house_sales.ui.scene import Primitive
from house_sales.ui.tooltip import tooltip_html

EMPTY_MESSAGE = "No listings match the current filters"


def _configure_layout(
    fig: go.Figure,
    layout: ChartLayout,
    xaxis_title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
) -> go.Figure:
    margin = layout.margin
    fig.update_layout(
        template=CHART_THEME.template,
        width=layout.width,
        height=layout.height,
        showlegend=False,
        hovermode="closest",
        font=dict(family=CHART_THEME.font_family),
        margin=dict(l=margin.left, r=margin.right, t=margin.top, b=margin.bottom),
    )
    if xaxis_title:
        fig.update_xaxes(title=xaxis_title)
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=False)
    return fig


def _apply_transition(fig: go.Figure, primitives: Iterable[Primitive]) -> go.Figure:
    durations = [p.transition.duration_ms for p in primitives if p.transition is not None]
    if durations:
        fig.update_layout(transition=dict(duration=max(durations), easing="cubic-in-out"))
    return fig


def _empty_figure(fig: go.Figure) -> go.Figure:
    fig.add_annotation(
        text=EMPTY_MESSAGE,
        xref="paper",
        yref="paper",
        x=0.5,
        y=0.5,
        showarrow=False,
        font={"size": 14},
    )
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


def bar_figure(scene: BarScene) -> go.Figure:
    fig = go.Figure()
    fig = _configure_layout(fig, scene.layout, xaxis_title=CHART_THEME.axis_titles["bar_x"])
    bars = scene.bars()
    if not bars or scene.x is None:
        return _empty_figure(fig)

    regions = [bar.key for bar in bars]
    hover = [
        tooltip_html(*bar_tooltip_rows(bar.key, bar.datum.mean_price, bar.datum.listing_count))
        for bar in bars
    ]
    fig.add_trace(
        go.Bar(
            x=[bar.datum.mean_price for bar in bars],
            y=regions,
            ids=regions,
            customdata=[[region] for region in regions],
            orientation="h",
            marker_color=[bar.attrs["fill"] for bar in bars],
            hovertext=hover,
            hoverinfo="text",
        )
    )
    ticks = scene.x.ticks(5)
    fig.update_xaxes(
        range=list(scene.x.domain),
        tickmode="array",
        tickvals=ticks,
        ticktext=[format_thousands_tick(t) for t in ticks],
    )
    # First region (highest mean price) at the top
    fig.update_yaxes(categoryorder="array", categoryarray=regions, autorange="reversed", showgrid=False)
    fig.update_layout(bargap=BAND_PADDING)
    return _apply_transition(fig, bars)


def scatter_figure(scene: ScatterScene) -> go.Figure:
    fig = go.Figure()
    fig = _configure_layout(
        fig,
        scene.layout,
        xaxis_title=CHART_THEME.axis_titles["scatter_x"],
        yaxis_title=CHART_THEME.axis_titles["scatter_y"],
    )
    points = scene.points()
    if not points or scene.x is None or scene.y is None:
        return _empty_figure(fig)

    fig.add_trace(
        go.Scatter(
            x=[p.datum.area for p in points],
            y=[p.datum.price for p in points],
            ids=[str(p.key) for p in points],
            customdata=[[p.key] for p in points],
            mode="markers",
            marker=dict(
                color=[p.attrs["fill"] for p in points],
                size=[p.attrs["r"] * 2 for p in points],
                opacity=[p.attrs["opacity"] for p in points],
                line=dict(width=0),
            ),
            hovertext=[tooltip_html(*point_tooltip_rows(p.datum)) for p in points],
            hoverinfo="text",
        )
    )
    fig.update_xaxes(range=list(scene.x.domain), nticks=5)
    # Log axes take their range in log10 units
    fig.update_yaxes(
        type="log",
        range=[math.log10(scene.y.domain[0]), math.log10(scene.y.domain[1])],
        tickformat="~s",
        nticks=5,
    )

    annotation = scene.annotation
    if annotation is not None:
        listing = scene.scene[annotation.target].datum
        fig.add_annotation(
            x=listing.area,
            y=math.log10(listing.price),
            ax=annotation.dx,
            ay=annotation.dy,
            text=f"<b>{annotation.title}</b><br>{annotation.label}",
            showarrow=True,
            arrowhead=0,
            align="left",
            width=annotation.wrap,
            bgcolor="rgba(255,255,255,0.85)",
        )
    return _apply_transition(fig, points)


def render_plotly(fig: go.Figure, key: Optional[str] = None, selectable: bool = False):
    if selectable:
        return st.plotly_chart(
            fig,
            use_container_width=True,
            config={"displayModeBar": False},
            key=key,
            on_select="rerun",
            selection_mode="points",
        )
    return st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False}, key=key)
