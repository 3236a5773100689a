import pandas as pd

from house_sales.data.filters import FilterState
from house_sales.data.pipeline import DashboardController, recompute


def test_recompute_is_idempotent(mixed_listings):
    state = FilterState("Single Family", "Sold")
    first = recompute(mixed_listings, state)
    second = recompute(mixed_listings, state)
    pd.testing.assert_frame_equal(first.filtered, second.filtered)
    pd.testing.assert_frame_equal(first.region_stats, second.region_stats)


def test_result_keeps_a_snapshot_of_the_state(scenario_listings):
    state = FilterState("Condo", "All")
    result = recompute(scenario_listings, state)
    state.status = "Sold"
    assert result.state.status == "All"


def test_controller_starts_from_default_state(scenario_listings):
    controller = DashboardController(scenario_listings)
    assert controller.state == FilterState("Condo", "All")
    assert len(controller.result.filtered) == 3


def test_set_status_recomputes_and_notifies(scenario_listings):
    controller = DashboardController(scenario_listings)
    received = []
    controller.subscribe(received.append, replay=False)

    assert controller.set_status("Sold") is True
    assert controller.state.status == "Sold"
    assert len(received) == 1
    assert received[0].region_stats["region"].tolist() == ["CA"]


def test_subscribe_replays_current_result(scenario_listings):
    controller = DashboardController(scenario_listings)
    received = []
    controller.subscribe(received.append)
    assert received == [controller.result]


def test_invalid_selections_are_ignored(mixed_listings, caplog):
    controller = DashboardController(mixed_listings)
    received = []
    controller.subscribe(received.append, replay=False)

    assert controller.set_property_type("Castle") is False
    assert controller.set_status("Foreclosed") is False
    assert controller.state == FilterState("Condo", "All")
    assert received == []
    assert "Castle" in caplog.text


def test_set_property_type_switches_filtered_set(mixed_listings):
    controller = DashboardController(mixed_listings)
    controller.set_property_type("Single Family")
    assert set(controller.result.filtered["property_type"]) == {"Single Family"}
    assert controller.result.region_stats["region"].tolist() == ["FL", "CO", "TX"]
