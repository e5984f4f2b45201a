"""
Dashboard tables over the whole record frame.

Like the KPIs these ignore the report filter: they look at every record as of
`now`. Aging cutoffs, list sizes and the P&L horizon default to configuration.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from ..config import get_config
from ..data.models import (
    ACTIVE_STATUSES,
    AgingBuckets,
    AgingWatchlist,
    Channel,
    InventoryBreakdown,
    InventoryBreakdownRow,
    InventoryBreakdownTotals,
    MonthlyPnl,
    ReportFilter,
    StatusSummary,
    ThresholdAgingBucket,
    WatchlistItem,
)
from .aggregations import monthly_financials
from .filters import calendar_day, end_of_day, start_of_day
from .selection import select_records

OTHER_CATEGORY = "Other"


def _active(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.loc[frame["status"].isin([status.value for status in ACTIVE_STATUSES])]


def _ages(active: pd.DataFrame, now: Union[date, datetime]) -> pd.Series:
    return (calendar_day(now) - active["acquired_at"]).dt.days.clip(lower=0)


def _empty_statuses() -> Dict[str, StatusSummary]:
    return {status.value: StatusSummary() for status in ACTIVE_STATUSES}


# ---------- inventory breakdown ----------

def inventory_breakdown(frame: pd.DataFrame, limit: Optional[int] = None) -> InventoryBreakdown:
    """
    Count and value of active inventory per category and status.

    The `limit` most valuable categories get their own row; the rest are
    folded into a single 'Other' row. Grand totals cover every category.
    """
    if limit is None:
        limit = get_config().inventory_breakdown_limit
    limit = max(int(limit), 0)

    rows: List[InventoryBreakdownRow] = []
    for category, group in _active(frame).groupby("category", sort=False):
        statuses = _empty_statuses()
        for status, part in group.groupby("status"):
            statuses[status] = StatusSummary(count=len(part), total_cost=int(part["total_cost"].sum()))
        rows.append(InventoryBreakdownRow(
            category=category,
            statuses=statuses,
            total_count=len(group),
            total_cost=int(group["total_cost"].sum()),
        ))
    rows.sort(key=lambda row: row.total_cost, reverse=True)

    totals = InventoryBreakdownTotals(statuses=_empty_statuses(), total_count=0, total_cost=0)
    for row in rows:
        _accumulate(totals, row)

    top, rest = rows[:limit], rows[limit:]
    if rest:
        other = InventoryBreakdownRow(category=OTHER_CATEGORY, statuses=_empty_statuses(), total_count=0, total_cost=0)
        for row in rest:
            _accumulate(other, row)
        top.append(other)

    return InventoryBreakdown(rows=top, grand_totals=totals)


def _accumulate(target: Union[InventoryBreakdownRow, InventoryBreakdownTotals], row: InventoryBreakdownRow) -> None:
    target.total_count += row.total_count
    target.total_cost += row.total_cost
    for status, summary in row.statuses.items():
        target.statuses[status].count += summary.count
        target.statuses[status].total_cost += summary.total_cost


# ---------- threshold aging ----------

def seed_threshold_buckets(thresholds: Tuple[int, int, int]) -> List[ThresholdAgingBucket]:
    """Four empty buckets: 0..t1, t1+1..t2, t2+1..t3 and t3+1 onwards."""
    first, second, third = thresholds
    return [
        ThresholdAgingBucket(label=f"0-{first}", min_days=0, max_days=first, threshold=first),
        ThresholdAgingBucket(label=f"{first + 1}-{second}", min_days=first + 1, max_days=second, threshold=second),
        ThresholdAgingBucket(label=f"{second + 1}-{third}", min_days=second + 1, max_days=third, threshold=third),
        ThresholdAgingBucket(label=f"{third + 1}+", min_days=third + 1),
    ]


def aging_buckets(
    frame: pd.DataFrame,
    now: Union[date, datetime],
    thresholds: Optional[Tuple[int, int, int]] = None,
) -> AgingBuckets:
    """Active units bucketed by days in stock against the configured cutoffs."""
    if thresholds is None:
        thresholds = get_config().aging_thresholds
    thresholds = tuple(int(t) for t in thresholds)

    buckets = seed_threshold_buckets(thresholds)
    active = _active(frame)
    for age, value in zip(_ages(active, now), active["total_cost"]):
        for bucket in buckets:
            if age >= bucket.min_days and (bucket.max_days is None or age <= bucket.max_days):
                bucket.count += 1
                bucket.total_value += int(value)
                break

    return AgingBuckets(buckets=buckets, thresholds=thresholds)


def aging_watchlist(
    frame: pd.DataFrame,
    now: Union[date, datetime],
    thresholds: Optional[Tuple[int, int, int]] = None,
    limit: Optional[int] = None,
) -> AgingWatchlist:
    """
    Longest-held active units past the warning and critical cutoffs.

    Warning uses the second cutoff and critical the third; both compare with
    `>`, so a unit exactly at a cutoff is not listed. Oldest first.
    """
    config = get_config()
    if thresholds is None:
        thresholds = config.aging_thresholds
    if limit is None:
        limit = config.watchlist_limit
    limit = max(int(limit), 0)
    warning_threshold, critical_threshold = int(thresholds[1]), int(thresholds[2])

    active = _active(frame).assign(days_in_stock=lambda df: _ages(df, now))
    active = active.sort_values("days_in_stock", ascending=False, kind="stable")

    def pick(threshold: int) -> List[WatchlistItem]:
        matches = active.loc[active["days_in_stock"] > threshold].head(limit)
        return [
            WatchlistItem(
                item_id=row.item_id,
                product_name=row.product_name,
                acquired_at=row.acquired_at.date(),
                cost=int(row.total_cost),
                price=int(row.price),
                days_in_stock=int(row.days_in_stock),
            )
            for row in matches.itertuples(index=False)
        ]

    return AgingWatchlist(
        warning=pick(warning_threshold),
        critical=pick(critical_threshold),
        warning_threshold=warning_threshold,
        critical_threshold=critical_threshold,
    )


# ---------- monthly P&L ----------

def monthly_pnl(frame: pd.DataFrame, now: Union[date, datetime], months: Optional[int] = None) -> MonthlyPnl:
    """Revenue, cost and profit for each of the last `months` months, every channel."""
    if months is None:
        months = get_config().monthly_pnl_months
    months = max(int(months), 1)

    today = calendar_day(now)
    first = today.replace(day=1) - pd.DateOffset(months=months - 1)
    last = today + pd.offsets.MonthEnd(0)
    window = ReportFilter(
        start_date=start_of_day(first),
        end_date=end_of_day(last),
        channels=list(Channel),
    )

    sets = select_records(frame, window)
    return MonthlyPnl(months=months, points=monthly_financials(sets.sold, window))
