from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import pandas as pd

from ..data.models import InventoryRecord, ItemStatus, ReportFilter

RECORD_COLUMNS = [
    "item_id",
    "product_id",
    "product_name",
    "category",
    "channel",
    "status",
    "acquired_at",
    "listed_at",
    "sold_at",
    "price",
    "cost",
    "refurb_cost",
]
DATE_COLUMNS = ["acquired_at", "listed_at", "sold_at"]
MONEY_COLUMNS = ["price", "cost", "refurb_cost"]


@dataclass(frozen=True)
class WorkingSets:
    """The two record sets every aggregation draws from."""
    filters: ReportFilter
    # acquired_at in range; valuation, funnel, aging and sell-through totals
    acquired: pd.DataFrame
    # sold_at in range; revenue, cost and profit metrics
    sold: pd.DataFrame


def records_frame(records: Iterable[InventoryRecord]) -> pd.DataFrame:
    """
    Flatten records into a frame, one row per record, in input order.

    Enum columns hold their string values, date columns are day-precision
    datetimes (NaT when absent) and money columns are int64. Adds the derived
    `total_cost` (cost + refurb_cost) and `profit` (price - total_cost) columns.
    """
    rows = [record.model_dump(mode="json") for record in records]
    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)
    for col in DATE_COLUMNS:
        df[col] = pd.to_datetime(df[col])
    df[MONEY_COLUMNS] = df[MONEY_COLUMNS].astype("int64")
    df["total_cost"] = df["cost"] + df["refurb_cost"]
    df["profit"] = df["price"] - df["total_cost"]
    return df


def select_records(frame: pd.DataFrame, filters: ReportFilter) -> WorkingSets:
    """
    Apply a resolved filter to the full record frame.

    The two sets are independent: a unit sold in range may have been acquired
    long before it, and a unit acquired in range need not be sold.
    """
    start = pd.Timestamp(filters.start_date)
    end = pd.Timestamp(filters.end_date)

    mask = frame["channel"].isin([channel.value for channel in filters.channels])
    if filters.category:
        mask &= (frame["category"] == filters.category)

    acquired_mask = mask & frame["acquired_at"].between(start, end)
    sold_mask = (
        mask
        & (frame["status"] == ItemStatus.SOLD.value)
        & frame["sold_at"].notna()
        & frame["sold_at"].between(start, end)
    )

    return WorkingSets(
        filters=filters,
        acquired=frame.loc[acquired_mask].reset_index(drop=True),
        sold=frame.loc[sold_mask].reset_index(drop=True),
    )
