import pandas as pd
import pytest

from house_sales.data.cleaning import clean_listings


def raw_frame(rows):
    columns = [
        "Price",
        "Area (Sqft)",
        "State",
        "City",
        "Property Type",
        "Status",
        "Bedrooms",
        "Bathrooms",
        "Year Built",
    ]
    return pd.DataFrame(rows, columns=columns)


@pytest.fixture
def scenario_raw():
    return raw_frame(
        [
            ["$300,000", "1,000 sqft", "CA", "Los Angeles", "Condo", "Sold", "2", "1", "1998"],
            ["$500,000", "1,500 sqft", "CA", "San Diego", "Condo", "Sold", "3", "2", "2005"],
            ["$200,000", "900 sqft", "TX", "Austin", "Condo", "Active", "2", "1", "2010"],
        ]
    )


@pytest.fixture
def scenario_listings(scenario_raw):
    return clean_listings(scenario_raw)


@pytest.fixture
def mixed_listings():
    return clean_listings(
        raw_frame(
            [
                ["$300,000", "1,000 sqft", "CA", "Los Angeles", "Condo", "Sold", "2", "1", "1998"],
                ["$500,000", "1,500 sqft", "CA", "San Diego", "Condo", "Sold", "3", "2", "2005"],
                ["$200,000", "900 sqft", "TX", "Austin", "Condo", "Active", "2", "1", "2010"],
                ["$420,000", "2,300 sqft", "TX", "Houston", "Single Family", "Active", "4", "3", "2001"],
                ["$1,250,000", "3,100 sqft", "FL", "Miami", "Single Family", "Sold", "5", "4", "2015"],
                ["$275,000", "1,150 sqft", "FL", "Orlando", "Townhouse", "Pending", "2", "2", "1995"],
                ["$640,000", "2,050 sqft", "CO", "Denver", "Single Family", "Sold", "4", "3", "2008"],
            ]
        )
    )
