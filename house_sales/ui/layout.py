"""
Layout helpers for the Streamlit application: page setup, the facet
selectors, the scatter legend, chart selections and the sidebar.

Widgets only forward events: every callback goes through the controller or
a scene, which own the state. Widget values are re-synced from that state
before each widget is drawn.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import streamlit as st

from house_sales.config import ALL_HIGHLIGHT, ChartLayout
from house_sales.data.filters import serialize_filters
from house_sales.data.pipeline import DashboardController
from house_sales.ui.bar_scene import BarScene
from house_sales.ui.components.formatting import format_number
from house_sales.ui.scatter_scene import ScatterScene
from house_sales.ui.tooltip import Pointer, Tooltip

STATUS_KEY = "hs_status"
HIGHLIGHT_KEY = "hs_highlight"
HIGHLIGHT_FRESH_KEY = "hs_highlight_fresh"
BAR_CHART_KEY = "hs_bar_chart"
SCATTER_CHART_KEY = "hs_scatter_chart"
WIDGET_KEYS = (STATUS_KEY, HIGHLIGHT_KEY, HIGHLIGHT_FRESH_KEY)


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="House Sales Market Analysis",
        layout="wide",
        page_icon=":house:",
    )


def scene_title(controller: DashboardController) -> str:
    return f"Market Analysis for {controller.state.property_type} Homes"


def property_type_buttons(controller: DashboardController) -> None:
    """One button per property type; the active one is drawn as primary."""
    types = controller.domains.property_types
    if not types:
        return
    cols = st.columns(len(types))
    for col, property_type in zip(cols, types):
        with col:
            st.button(
                property_type,
                key=f"hs_type_{property_type}",
                type="primary" if property_type == controller.state.property_type else "secondary",
                on_click=controller.set_property_type,
                args=(property_type,),
                use_container_width=True,
            )


def status_radio(controller: DashboardController) -> None:
    statuses = list(controller.domains.statuses)
    # The controller owns the status; a rebuilt session starts again from "All"
    if st.session_state.get(STATUS_KEY) != controller.state.status:
        st.session_state[STATUS_KEY] = controller.state.status
    st.radio(
        "Status",
        statuses,
        key=STATUS_KEY,
        horizontal=True,
        on_change=lambda: controller.set_status(st.session_state[STATUS_KEY]),
    )


def _on_legend_change(scatter: ScatterScene) -> None:
    region = st.session_state[HIGHLIGHT_KEY]
    if region == ALL_HIGHLIGHT:
        scatter.legend_leave()
    else:
        scatter.legend_enter(region)
        st.session_state[HIGHLIGHT_FRESH_KEY] = True


def legend_control(scatter: ScatterScene) -> None:
    """
    Legend entries for the scatter. Streamlit has no pointer-hover events,
    so choosing an entry plays the role of hovering it and choosing
    "All Regions" plays the role of leaving the legend.

    A highlight only lasts for the rerun its legend choice triggered; any
    other interaction leaves the legend and returns to "All Regions".
    """
    if not st.session_state.pop(HIGHLIGHT_FRESH_KEY, False) and scatter.selection != ALL_HIGHLIGHT:
        scatter.legend_leave()
    entries = {entry.region: entry for entry in scatter.legend}
    # A recompute resets the highlight; keep the widget in step with the scene
    if st.session_state.get(HIGHLIGHT_KEY) != scatter.selection:
        st.session_state[HIGHLIGHT_KEY] = scatter.selection
    st.radio(
        "Highlight region",
        list(entries),
        key=HIGHLIGHT_KEY,
        horizontal=True,
        format_func=lambda region: entries[region].label,
        on_change=_on_legend_change,
        args=(scatter,),
    )


def selected_key(chart_state: Optional[Mapping[str, Any]]) -> Optional[Any]:
    """Key carried in `customdata` by the first selected mark of a chart."""
    if not chart_state:
        return None
    points = (chart_state.get("selection") or {}).get("points") or []
    for point in points:
        customdata = point.get("customdata")
        if customdata:
            return customdata[0]
    return None


def _chart_pointer(layout: ChartLayout, x: float, y: float) -> Pointer:
    return layout.margin.left + x, layout.margin.top + y


def sync_bar_hover(bar: BarScene) -> None:
    """Treat the bar picked on the bar chart as the hovered bar."""
    key = selected_key(st.session_state.get(BAR_CHART_KEY))
    if key is not None and key in bar.scene:
        attrs = bar.scene[key].attrs
        bar.hover(key, _chart_pointer(bar.layout, attrs["width"], attrs["y"] + attrs["height"] / 2))
    else:
        bar.leave()


def sync_point_hover(scatter: ScatterScene) -> None:
    """Treat the point picked on the scatter chart as the hovered point."""
    key = selected_key(st.session_state.get(SCATTER_CHART_KEY))
    if key is not None and key in scatter.scene:
        if scatter.hovered != key:
            attrs = scatter.scene[key].attrs
            scatter.hover_point(key, _chart_pointer(scatter.layout, attrs["cx"], attrs["cy"]))
    elif scatter.hovered is not None:
        scatter.leave_point(scatter.hovered)


def tooltip_details(tooltip: Tooltip, placeholder: str) -> None:
    if tooltip.visible:
        st.markdown(tooltip.to_html(), unsafe_allow_html=True)
    else:
        st.caption(placeholder)


def bar_details(bar: BarScene) -> None:
    tooltip_details(bar.tooltip, "Select a bar to see its region summary.")


def point_details(scatter: ScatterScene) -> None:
    tooltip_details(scatter.tooltip, "Select a point to see its full details.")


def filter_summary(controller: DashboardController) -> None:
    st.session_state["hs_active_filters"] = serialize_filters(controller.state)
    st.caption(f"Showing {format_number(len(controller.result.filtered))} listings after filters.")


def sidebar_refresh() -> bool:
    st.sidebar.header("Data")
    return st.sidebar.button("🔄 Refresh Data")
