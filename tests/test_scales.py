import pytest

from house_sales.ui.scales import (
    TABLEAU10,
    BandScale,
    LinearScale,
    RegionPalette,
    build_band_scale,
    build_linear_scale,
    build_log_scale,
    nice_linear,
    nice_log,
)


@pytest.mark.parametrize(
    "stop, expected",
    [
        (400000, 400000.0),
        (412345, 450000.0),
        (0.87, 0.9),
        (1234, 1300.0),
    ],
)
def test_nice_linear_rounds_upper_bound(stop, expected):
    start, nice_stop = nice_linear(0.0, stop)
    assert start == 0.0
    assert nice_stop == pytest.approx(expected)


def test_linear_scale_maps_domain_onto_range():
    scale = build_linear_scale([100.0, 400000.0], (0.0, 380.0))
    assert scale.domain == (0.0, 400000.0)
    assert scale(0) == 0.0
    assert scale(200000) == pytest.approx(190.0)
    assert scale(400000) == pytest.approx(380.0)


def test_linear_ticks_cover_domain():
    assert LinearScale((0.0, 400000.0), (0.0, 1.0)).ticks(5) == [0.0, 100000.0, 200000.0, 300000.0, 400000.0]


def test_degenerate_domain_maps_to_midpoint():
    scale = LinearScale((5.0, 5.0), (0.0, 100.0))
    assert scale(5.0) == 50.0


def test_builders_return_none_for_empty_values():
    assert build_linear_scale([], (0.0, 1.0)) is None
    assert build_band_scale([], (0.0, 1.0)) is None
    assert build_log_scale([], (0.0, 1.0)) is None


def test_log_scale_extends_to_powers_of_ten():
    assert nice_log(200000.0, 500000.0) == (100000.0, 1000000.0)
    scale = build_log_scale([200000.0, 500000.0], (340.0, 0.0))
    assert scale(100000.0) == pytest.approx(340.0)
    assert scale(1000000.0) == pytest.approx(0.0)
    assert scale(316227.766) == pytest.approx(170.0, abs=1e-3)


def test_band_scale_padding():
    scale = BandScale(["CA", "TX"], (0.0, 340.0), padding=0.1)
    step = 340.0 / 2.1
    assert scale.step == pytest.approx(step)
    assert scale.bandwidth == pytest.approx(step * 0.9)
    assert scale("CA") == pytest.approx(step * 0.1)
    assert scale("TX") == pytest.approx(step * 1.1)
    assert scale("NY") is None


def test_palette_is_assigned_by_sorted_region_code():
    encounter_order = RegionPalette(["TX", "CA", "FL"])
    sorted_order = RegionPalette(["CA", "FL", "TX"])
    assert encounter_order.colors == sorted_order.colors
    assert encounter_order("CA") == TABLEAU10[0]
    assert encounter_order("TX") == TABLEAU10[2]


def test_palette_cycles_past_ten_regions():
    regions = [f"R{i:02d}" for i in range(12)]
    palette = RegionPalette(regions)
    assert palette("R10") == palette("R00")
