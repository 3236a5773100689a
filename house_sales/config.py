"""
Application-wide configuration constants and helper utilities.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


@dataclass(frozen=True)
class Margin:
    top: int
    right: int
    bottom: int
    left: int


@dataclass(frozen=True)
class ChartLayout:
    width: int
    height: int
    margin: Margin

    @property
    def inner_width(self) -> int:
        return self.width - self.margin.left - self.margin.right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin.top - self.margin.bottom


@dataclass(frozen=True)
class PointStyle:
    opacity: float
    radius: float


# ======================================================
#  SOURCE CONTRACT
# ======================================================
# Source header -> canonical column name
SOURCE_COLUMNS: Dict[str, str] = {
    "Price": "price",
    "Area (Sqft)": "area",
    "State": "region",
    "City": "city",
    "Property Type": "property_type",
    "Status": "status",
    "Bedrooms": "bedrooms",
    "Bathrooms": "bathrooms",
    "Year Built": "year_built",
}
OPTIONAL_SOURCE_COLUMNS: Dict[str, str] = {
    "Address": "address",
}

DEFAULT_CSV_PATH: str = "data/us_house_Sales_data.csv"
DEFAULT_SHEET_NAME: str = "Listings"
CACHE_TTL_SECONDS: int = 600

# ======================================================
#  FILTER / LEGEND SENTINELS
# ======================================================
ALL_STATUSES: str = "All"
ALL_HIGHLIGHT: str = "All"
ALL_REGIONS_LABEL: str = "All Regions"

# ======================================================
#  CHART LAYOUTS
# ======================================================
BAR_LAYOUT = ChartLayout(width=500, height=400, margin=Margin(top=10, right=20, bottom=50, left=100))
SCATTER_LAYOUT = ChartLayout(width=400, height=400, margin=Margin(top=10, right=20, bottom=50, left=60))

BAND_PADDING: float = 0.1

# ======================================================
#  TRANSITIONS (milliseconds)
# ======================================================
BAR_TRANSITION_MS: int = 800
HIGHLIGHT_TRANSITION_MS: int = 300
TOOLTIP_FADE_IN_MS: int = 200
TOOLTIP_FADE_OUT_MS: int = 500
TOOLTIP_OPACITY: float = 0.9
TOOLTIP_OFFSET: Tuple[int, int] = (15, -28)

# ======================================================
#  SCATTER STYLING
# ======================================================
EMPHASIZED_POINT = PointStyle(opacity=0.7, radius=5)
DEEMPHASIZED_POINT = PointStyle(opacity=0.05, radius=2)
HOVER_FILL: str = "red"
LEGEND_ALL_SWATCH: str = "#ccc"

ANNOTATION_DY: int = -30
ANNOTATION_DX: int = 30
ANNOTATION_WRAP: int = 150


@dataclass(frozen=True)
class ChartTheme:
    template: str = "plotly_white"
    font_family: str = "sans-serif"
    axis_titles: Dict[str, str] = field(
        default_factory=lambda: {
            "bar_x": "Average Price",
            "scatter_x": "Area (Sqft)",
            "scatter_y": "Price (USD)",
        }
    )


CHART_THEME = ChartTheme()
