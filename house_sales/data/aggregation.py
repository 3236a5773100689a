from __future__ import annotations

import pandas as pd

REGION_STAT_COLUMNS = ["region", "mean_price", "listing_count"]


def region_stats(filtered: pd.DataFrame) -> pd.DataFrame:
    """Mean price and listing count per region, highest mean price first.

    Groups come out of groupby in region order and the sort is stable, so
    equal means keep region order.
    """
    if filtered.empty:
        return pd.DataFrame(
            {
                "region": pd.Series(dtype="object"),
                "mean_price": pd.Series(dtype="float64"),
                "listing_count": pd.Series(dtype="int64"),
            }
        )
    summary = (
        filtered.groupby("region", sort=True)
        .agg(
            mean_price=("price", "mean"),
            listing_count=("price", "size"),
        )
        .reset_index()
    )
    summary = summary.sort_values("mean_price", ascending=False, kind="mergesort").reset_index(drop=True)
    summary["mean_price"] = summary["mean_price"].astype("float64")
    summary["listing_count"] = summary["listing_count"].astype("int64")
    return summary[REGION_STAT_COLUMNS]
