"""
Cleaning of raw source rows into the typed listings frame.

A listing row carries: listing_id, price, area, region, city, property_type,
status, bedrooms, bathrooms, year_built and (optionally) address. Rows that
violate an invariant are dropped; there is no partial construction and no
rejection report.
"""

from __future__ import annotations

import pandas as pd

from house_sales.config import OPTIONAL_SOURCE_COLUMNS, SOURCE_COLUMNS

# Currency symbols, thousands separators and unit suffixes: "$1,250,000", "1,200 sqft"
DECORATION_PATTERN = r"[^\d.\-]"

REQUIRED_FIELDS = ["price", "area", "region", "city", "property_type", "status"]
LISTING_COLUMNS = [
    "listing_id",
    "price",
    "area",
    "region",
    "city",
    "property_type",
    "status",
    "bedrooms",
    "bathrooms",
    "year_built",
    "address",
]


def parse_decorated_number(series: pd.Series) -> pd.Series:
    """Strip currency symbols, separators and unit suffixes, then convert to float.

    Cells without a number become NaN.
    """
    stripped = series.astype(str).str.replace(DECORATION_PATTERN, "", regex=True)
    return pd.to_numeric(stripped, errors="coerce").astype("float64")


def _text(series: pd.Series) -> pd.Series:
    return series.astype("string").str.strip().replace("", pd.NA)


def empty_listings() -> pd.DataFrame:
    return pd.DataFrame({col: pd.Series(dtype="object") for col in LISTING_COLUMNS})


def clean_listings(raw: pd.DataFrame) -> pd.DataFrame:
    """Turn raw text rows into listings, excluding every invalid row."""
    if raw.empty:
        return empty_listings()

    renamed = raw.rename(columns={**SOURCE_COLUMNS, **OPTIONAL_SOURCE_COLUMNS})
    df = pd.DataFrame(index=renamed.index)
    df["listing_id"] = range(len(renamed))
    df["price"] = parse_decorated_number(renamed["price"])
    df["area"] = parse_decorated_number(renamed["area"])
    for col in ("region", "city", "property_type", "status", "bedrooms", "bathrooms"):
        df[col] = _text(renamed[col])
    df["year_built"] = parse_decorated_number(renamed["year_built"]).round().astype("Int64")
    df["address"] = _text(renamed["address"]) if "address" in renamed else pd.NA

    valid = df[REQUIRED_FIELDS].notna().all(axis=1)
    valid &= df["price"] > 0
    valid &= df["area"] > 0
    valid &= df["region"].str.len() == 2

    cleaned = df[valid.fillna(False).astype(bool)].reset_index(drop=True)
    for col in ("region", "city", "property_type", "status"):
        cleaned[col] = cleaned[col].astype(str)
    return cleaned[LISTING_COLUMNS]
