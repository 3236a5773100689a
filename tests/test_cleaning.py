import pandas as pd
import pytest

from house_sales.data.cleaning import LISTING_COLUMNS, clean_listings, parse_decorated_number

from conftest import raw_frame


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("$350,000", 350000.0),
        ("1,200 sqft", 1200.0),
        ("$1,250,000.50", 1250000.5),
        ("980", 980.0),
    ],
)
def test_parse_decorated_number_is_exact(raw, expected):
    assert parse_decorated_number(pd.Series([raw])).iloc[0] == expected


def test_parse_decorated_number_without_digits_is_nan():
    parsed = parse_decorated_number(pd.Series(["n/a sqft", None, ""]))
    assert parsed.isna().all()


def test_clean_listings_types_and_columns(scenario_listings):
    assert list(scenario_listings.columns) == LISTING_COLUMNS
    first = scenario_listings.iloc[0]
    assert first["price"] == 300000.0
    assert first["area"] == 1000.0
    assert first["region"] == "CA"
    assert first["year_built"] == 1998
    assert scenario_listings["listing_id"].tolist() == [0, 1, 2]


def test_invalid_rows_are_dropped():
    raw = raw_frame(
        [
            ["$300,000", "1,000 sqft", "CA", "Los Angeles", "Condo", "Sold", "2", "1", "1998"],
            ["$0", "1,000 sqft", "CA", "Fresno", "Condo", "Sold", "2", "1", "1998"],
            ["-$10,000", "1,000 sqft", "CA", "Fresno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "0 sqft", "CA", "Fresno", "Condo", "Sold", "2", "1", "1998"],
            [None, "1,000 sqft", "CA", "Fresno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", None, "CA", "Fresno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", "Nevada", "Reno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", "C", "Reno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", None, "Reno", "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", "NV", None, "Condo", "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", "NV", "Reno", None, "Sold", "2", "1", "1998"],
            ["$300,000", "1,000 sqft", "NV", "Reno", "Condo", None, "2", "1", "1998"],
        ]
    )
    cleaned = clean_listings(raw)
    assert len(cleaned) == 1
    assert cleaned.iloc[0]["city"] == "Los Angeles"
    assert len(cleaned) <= len(raw)


def test_optional_fields_may_be_missing():
    raw = raw_frame([["$300,000", "1,000 sqft", "CA", "Los Angeles", "Condo", "Sold", None, None, None]])
    cleaned = clean_listings(raw)
    assert len(cleaned) == 1
    assert pd.isna(cleaned.iloc[0]["year_built"])
    assert pd.isna(cleaned.iloc[0]["bedrooms"])


def test_empty_source_yields_empty_listings():
    cleaned = clean_listings(raw_frame([]))
    assert cleaned.empty
    assert list(cleaned.columns) == LISTING_COLUMNS
