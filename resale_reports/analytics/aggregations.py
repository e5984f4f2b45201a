"""
Report aggregations.

Each function is a stateless reducer over one or both working sets produced
by `select_records`:
- `sold` (sold in the window) feeds the money metrics
- `acquired` (acquired in the window) feeds valuation, funnel and aging

None of them mutate their input or raise on empty frames; empty input gives
zero-valued or empty tables. Time buckets (months, aging bins) are seeded over
their whole key domain first and accumulated second, so no bucket goes missing.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional, Union

import pandas as pd

from ..data.models import (
    AgingBucketEntry,
    CategoryInventoryEntry,
    Channel,
    ChannelMixEntry,
    InventoryByStatusEntry,
    ItemStatus,
    ListingFunnelEntry,
    MonthlyFinancial,
    ON_HAND_STATUSES,
    PriceMarginPoint,
    ProductProfitEntry,
    RepairRoi,
    RepairStats,
    RepairUplift,
    ReportFilter,
    RollingTrendPoint,
    SellThroughEntry,
)
from .filters import calendar_day
from .stats import bucket_index, median, percentage_of_total, rounded_ratio, safe_ratio

AGING_BUCKET_WIDTH_DAYS = 10
AGING_BUCKET_COUNT = 12
SHORT_WINDOW_DAYS = 30
LONG_WINDOW_DAYS = 60
TOP_PRODUCTS_LIMIT = 10
TOP_CATEGORIES_LIMIT = 8


# ---------- seeding helpers ----------

def seed_month_keys(filters: ReportFilter) -> List[str]:
    """Every YYYY-MM key from the month of start_date to the month of end_date."""
    if filters.end_date < filters.start_date:
        return []
    first = pd.Timestamp(filters.start_date).normalize().replace(day=1)
    last = pd.Timestamp(filters.end_date).normalize().replace(day=1)
    return [month.strftime("%Y-%m") for month in pd.date_range(first, last, freq="MS")]


def seed_aging_buckets(
    width: int = AGING_BUCKET_WIDTH_DAYS,
    count: int = AGING_BUCKET_COUNT,
) -> List[AgingBucketEntry]:
    """All aging buckets, empty, in ascending order; the last one is open ended."""
    buckets = []
    for index in range(count):
        start = index * width
        end = None if index == count - 1 else start + width - 1
        buckets.append(AgingBucketEntry(
            label=f"{start}+" if end is None else f"{start}-{end}",
            range_start=start,
            range_end=end,
            count=0,
            total_value=0,
        ))
    return buckets


def _on_hand(acquired: pd.DataFrame) -> pd.DataFrame:
    return acquired.loc[acquired["status"] != ItemStatus.SOLD.value]


# ---------- money metrics (sold set) ----------

def monthly_financials(sold: pd.DataFrame, filters: ReportFilter) -> List[MonthlyFinancial]:
    """Revenue/cost/profit per calendar month of the window, zero months included."""
    buckets: Dict[str, Dict[str, int]] = {
        month: {"revenue": 0, "cost": 0, "profit": 0} for month in seed_month_keys(filters)
    }

    if not sold.empty:
        totals = (
            sold.assign(month=sold["sold_at"].dt.strftime("%Y-%m"))
                .groupby("month")[["price", "total_cost", "profit"]]
                .sum()
        )
        for month, row in totals.iterrows():
            bucket = buckets.setdefault(month, {"revenue": 0, "cost": 0, "profit": 0})
            bucket["revenue"] += int(row["price"])
            bucket["cost"] += int(row["total_cost"])
            bucket["profit"] += int(row["profit"])

    return [MonthlyFinancial(month=month, **buckets[month]) for month in sorted(buckets)]


def rolling_trend(sold: pd.DataFrame, filters: ReportFilter) -> List[RollingTrendPoint]:
    """
    Daily profit over the window with trailing simple moving averages.

    Windows hold up to 30/60 days and shrink near the start of the range; days
    before start_date are never pulled in.
    """
    days = pd.date_range(
        pd.Timestamp(filters.start_date).normalize(),
        pd.Timestamp(filters.end_date).normalize(),
        freq="D",
    )
    if len(days) == 0:
        return []

    daily = (
        sold.groupby("sold_at")["profit"].sum()
            .reindex(days, fill_value=0)
            .astype("int64")
    )
    rolling_short = daily.rolling(window=SHORT_WINDOW_DAYS, min_periods=1).mean()
    rolling_long = daily.rolling(window=LONG_WINDOW_DAYS, min_periods=1).mean()

    return [
        RollingTrendPoint(
            date=day.strftime("%Y-%m-%d"),
            profit=int(daily.iloc[i]),
            rolling_30=float(rolling_short.iloc[i]),
            rolling_60=float(rolling_long.iloc[i]),
        )
        for i, day in enumerate(days)
    ]


def channel_mix(sold: pd.DataFrame) -> List[ChannelMixEntry]:
    """
    Revenue share per channel, in canonical channel order.

    Channels without revenue are left out, except when nothing was sold at all:
    then every channel is listed with zero revenue and a zero share.
    """
    total = int(sold["price"].sum()) if not sold.empty else 0
    by_channel = sold.groupby("channel")["price"].sum()

    entries = []
    for channel in Channel:
        revenue = int(by_channel.get(channel.value, 0))
        if revenue > 0 or sold.empty:
            entries.append(ChannelMixEntry(
                channel=channel,
                revenue=revenue,
                percentage=percentage_of_total(revenue, total),
            ))
    return entries


def top_products(sold: pd.DataFrame, limit: int = TOP_PRODUCTS_LIMIT) -> List[ProductProfitEntry]:
    """Products ranked by total profit, highest first; ties keep first-sale order."""
    entries = []
    for product_id, group in sold.groupby("product_id", sort=False):
        revenue = int(group["price"].sum())
        cost = int(group["total_cost"].sum())
        profit = revenue - cost
        units = len(group)
        entries.append(ProductProfitEntry(
            product_id=str(product_id),
            product_name=group["product_name"].iloc[0],
            category=group["category"].iloc[0],
            channels=[Channel(value) for value in group["channel"].unique()],
            units_sold=units,
            revenue=revenue,
            cost=cost,
            profit=profit,
            average_profit=rounded_ratio(profit, units),
            median_sold_price=median([int(price) for price in group["price"]]),
        ))

    entries.sort(key=lambda entry: entry.profit, reverse=True)
    return entries[:max(int(limit), 0)]


def repair_roi(sold: pd.DataFrame) -> RepairRoi:
    """Refurbished against standard sales, plus the per-product peer uplift of refurbishment."""
    refurbished = sold.loc[sold["refurb_cost"] > 0]
    standard = sold.loc[sold["refurb_cost"] == 0]

    def summarize(frame: pd.DataFrame, label: str) -> RepairStats:
        revenue = int(frame["price"].sum())
        cost = int(frame["total_cost"].sum())
        profit = revenue - cost
        return RepairStats(
            label=label,
            count=len(frame),
            revenue=revenue,
            cost=cost,
            profit=profit,
            margin=safe_ratio(profit, revenue),
        )

    # Average standard profit per product is the baseline a refurbished unit competes with.
    baseline = {
        product_id: rounded_ratio(int(profits.sum()), len(profits))
        for product_id, profits in standard.groupby("product_id", sort=False)["profit"]
    }
    refurb_profit = int(refurbished["profit"].sum())
    peer_baseline = sum(
        baseline[product_id] for product_id in refurbished["product_id"] if product_id in baseline
    )
    extra_margin = refurb_profit - peer_baseline

    return RepairRoi(
        refurbished=summarize(refurbished, "Refurbished"),
        standard=summarize(standard, "Standard"),
        uplift=RepairUplift(
            refurb_count=len(refurbished),
            total_refurb_cost=int(refurbished["refurb_cost"].sum()),
            total_refurb_profit=refurb_profit,
            peer_baseline_profit=int(peer_baseline),
            extra_margin=extra_margin,
            average_extra_margin_per_item=rounded_ratio(extra_margin, len(refurbished)),
        ),
    )


def price_vs_margin(
    sold: pd.DataFrame,
    limit: Optional[int] = None,
    minimum_margin_percent: Optional[float] = None,
) -> List[PriceMarginPoint]:
    """
    One scatter point per sold unit, in input order.

    `limit` takes the first N rows; it is a prefix, not a representative sample.
    `minimum_margin_percent` only sets the `below_minimum_margin` display flag.
    """
    rows = sold if limit is None else sold.head(max(int(limit), 0))
    points = []
    for row in rows.itertuples(index=False):
        price = int(row.price)
        profit = int(row.profit)
        margin = safe_ratio(profit, price)
        points.append(PriceMarginPoint(
            item_id=row.item_id,
            product_id=row.product_id,
            product_name=row.product_name,
            category=row.category,
            channel=Channel(row.channel),
            price=price,
            profit=profit,
            margin=margin,
            below_minimum_margin=(
                minimum_margin_percent is not None and margin * 100 < minimum_margin_percent
            ),
        ))
    return points


# ---------- inventory metrics (acquired set) ----------

def inventory_by_status(acquired: pd.DataFrame) -> List[InventoryByStatusEntry]:
    """Total cost of non-sold inventory per channel and status, channels sorted by name."""
    totals = _on_hand(acquired).groupby(["channel", "status"])["total_cost"].sum()

    statuses: Dict[str, Dict[str, int]] = {}
    for (channel, status), value in totals.items():
        entry = statuses.setdefault(channel, {s.value: 0 for s in ON_HAND_STATUSES})
        entry[status] += int(value)

    return [
        InventoryByStatusEntry(
            channel=Channel(channel),
            statuses=values,
            total=sum(values.values()),
        )
        for channel, values in sorted(statuses.items())
    ]


def top_categories(acquired: pd.DataFrame, limit: int = TOP_CATEGORIES_LIMIT) -> List[CategoryInventoryEntry]:
    """Categories ranked by non-sold inventory value; ties keep first-seen order."""
    totals = (
        _on_hand(acquired)
        .groupby("category", sort=False)["total_cost"]
        .sum()
        .sort_values(ascending=False, kind="stable")
        .head(max(int(limit), 0))
    )
    return [
        CategoryInventoryEntry(category=category, value=int(value))
        for category, value in totals.items()
    ]


def sell_through(acquired: pd.DataFrame, sold: pd.DataFrame) -> List[SellThroughEntry]:
    """
    Units sold against units acquired, per category, best rate first.

    A category with sales but no acquisitions in the window gets a denominator
    of 1, so two such sales report a rate of 2.0.
    """
    totals: Dict[str, Dict[str, int]] = {}
    for category in acquired["category"]:
        entry = totals.setdefault(category, {"total": 0, "sold": 0})
        entry["total"] += 1
    for category in sold["category"]:
        entry = totals.setdefault(category, {"total": 0, "sold": 0})
        entry["sold"] += 1
        if entry["total"] == 0:
            entry["total"] = 1

    entries = [
        SellThroughEntry(
            category=category,
            sold=value["sold"],
            total=value["total"],
            rate=safe_ratio(value["sold"], value["total"]),
        )
        for category, value in totals.items()
    ]
    entries.sort(key=lambda entry: entry.rate, reverse=True)
    return entries


def listing_funnel(acquired: pd.DataFrame) -> List[ListingFunnelEntry]:
    """Current stage counts; LISTED, RESERVED and REPAIR all count as the LISTED stage."""
    status = acquired["status"]
    sold = int((status == ItemStatus.SOLD.value).sum())
    in_stock = int((status == ItemStatus.IN_STOCK.value).sum())
    listed = len(acquired) - sold - in_stock
    return [
        ListingFunnelEntry(stage="IN_STOCK", count=in_stock),
        ListingFunnelEntry(stage="LISTED", count=listed),
        ListingFunnelEntry(stage="SOLD", count=sold),
    ]


def aging_histogram(
    acquired: pd.DataFrame,
    now: Union[date, datetime],
    width: int = AGING_BUCKET_WIDTH_DAYS,
    count: int = AGING_BUCKET_COUNT,
) -> List[AgingBucketEntry]:
    """
    Holding age histogram in fixed-width day buckets.

    Age runs from acquisition to sale, or to `now` for unsold units, and is
    never negative. Every bucket is emitted, empty or not.
    """
    buckets = seed_aging_buckets(width, count)
    if acquired.empty:
        return buckets

    reference = calendar_day(now)
    completed = acquired["sold_at"].fillna(reference)
    ages = (completed - acquired["acquired_at"]).dt.days

    for age, value in zip(ages, acquired["total_cost"]):
        bucket = buckets[bucket_index(int(age), width, count)]
        bucket.count += 1
        bucket.total_value += int(value)
    return buckets
