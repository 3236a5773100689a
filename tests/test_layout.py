from house_sales.config import BAR_LAYOUT
from house_sales.data.filters import FilterState
from house_sales.data.pipeline import recompute
from house_sales.ui.bar_scene import BarScene
from house_sales.ui.components.charts import bar_figure
from house_sales.ui.layout import _chart_pointer, selected_key
from house_sales.ui.scales import RegionPalette


def test_selected_key_reads_first_customdata():
    chart_state = {"selection": {"points": [{"x": 1.0}, {"customdata": ["CA"]}, {"customdata": ["TX"]}]}}
    assert selected_key(chart_state) == "CA"


def test_selected_key_without_selection():
    assert selected_key(None) is None
    assert selected_key({"selection": {"points": []}}) is None
    assert selected_key({}) is None


def test_bar_selection_maps_to_bar_hover(scenario_listings):
    bar = BarScene(RegionPalette(scenario_listings["region"]))
    bar.on_recompute(recompute(scenario_listings, FilterState("Condo", "All")))
    fig = bar_figure(bar)
    key = selected_key({"selection": {"points": [{"customdata": list(fig.data[0].customdata[1])}]}})
    assert key == "TX"

    attrs = bar.scene[key].attrs
    tooltip = bar.hover(key, _chart_pointer(bar.layout, attrs["width"], attrs["y"]))
    assert tooltip.title == "TX"
    assert tooltip.left == BAR_LAYOUT.margin.left + attrs["width"] + 15


def test_rerender_hides_bar_tooltip(scenario_listings):
    bar = BarScene(RegionPalette(scenario_listings["region"]))
    bar.on_recompute(recompute(scenario_listings, FilterState("Condo", "All")))
    bar.hover("CA")
    bar.on_recompute(recompute(scenario_listings, FilterState("Condo", "Sold")))
    assert not bar.tooltip.visible
