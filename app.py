from house_sales.bootstrap_env import ensure_env

ensure_env()  # must run before the loader reads configuration

import logging

import streamlit as st

from house_sales.data.cleaning import clean_listings
from house_sales.data.loader import SourceLoadFailure, clear_cache, load_raw_rows
from house_sales.ui.components.charts import bar_figure, render_plotly, scatter_figure
from house_sales.ui.layout import (
    BAR_CHART_KEY,
    SCATTER_CHART_KEY,
    bar_details,
    filter_summary,
    legend_control,
    point_details,
    property_type_buttons,
    scene_title,
    setup_page,
    sidebar_refresh,
    status_radio,
    sync_bar_hover,
    sync_point_hover,
)
from house_sales.ui.session import get_session, reset_session

logger = logging.getLogger(__name__)


def _load_listings():
    listings = clean_listings(load_raw_rows())
    logger.info("Prepared %d listings", len(listings))
    return listings


def main() -> None:
    setup_page()

    try:
        if sidebar_refresh():
            clear_cache()
            reset_session()
        session = get_session(_load_listings)
    except SourceLoadFailure as exc:
        logger.exception("Listing source failed to load")
        st.error(f"Error loading data: {exc}")
        return

    controller = session.controller
    st.title(scene_title(controller))
    property_type_buttons(controller)
    status_radio(controller)
    filter_summary(controller)

    col_bar, col_scatter = st.columns(2)
    with col_bar:
        st.subheader("Average Price by State")
        sync_bar_hover(session.bar)
        render_plotly(bar_figure(session.bar), key=BAR_CHART_KEY, selectable=True)
        bar_details(session.bar)
    with col_scatter:
        st.subheader("Price vs. Area")
        legend_control(session.scatter)
        sync_point_hover(session.scatter)
        render_plotly(scatter_figure(session.scatter), key=SCATTER_CHART_KEY, selectable=True)
        point_details(session.scatter)


if __name__ == "__main__":
    main()
