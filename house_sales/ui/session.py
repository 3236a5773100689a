from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import pandas as pd
import streamlit as st

from house_sales.data.pipeline import DashboardController
from house_sales.ui.bar_scene import BarScene
from house_sales.ui.layout import WIDGET_KEYS
from house_sales.ui.scales import RegionPalette
from house_sales.ui.scatter_scene import ScatterScene

SESSION_KEY = "hs_dashboard_session"


@dataclass
class DashboardSession:
    controller: DashboardController
    bar: BarScene
    scatter: ScatterScene


def build_session(listings: pd.DataFrame) -> DashboardSession:
    """Wire the controller to both scenes; they share one palette built from every listing."""
    palette = RegionPalette(listings["region"].tolist())
    session = DashboardSession(
        controller=DashboardController(listings),
        bar=BarScene(palette),
        scatter=ScatterScene(palette),
    )
    session.controller.subscribe(session.bar.on_recompute)
    session.controller.subscribe(session.scatter.on_recompute)
    return session


def get_session(load_listings: Callable[[], pd.DataFrame]) -> DashboardSession:
    """Listings are loaded once per session; later reruns reuse the wired scenes."""
    session: Optional[DashboardSession] = st.session_state.get(SESSION_KEY)
    if session is None:
        session = build_session(load_listings())
        st.session_state[SESSION_KEY] = session
    return session


def reset_session() -> None:
    """Drop the wired scenes and the widget values that mirror their state."""
    for key in (SESSION_KEY,) + WIDGET_KEYS:
        st.session_state.pop(key, None)
