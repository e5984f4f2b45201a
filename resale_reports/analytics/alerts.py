from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

import pandas as pd

from ..config import get_config
from ..data.models import (
    ACTIVE_STATUSES,
    AgingAlertItem,
    AgingAlerts,
    AlertsSummary,
    Channel,
    ItemStatus,
    LowMarginAlertItem,
    LowMarginAlerts,
    StaleListingAlertItem,
    StaleListingAlerts,
)

from .filters import calendar_day

MAX_ALERT_ITEMS = 20


def _base_fields(row) -> dict:
    return {
        "item_id": row.item_id,
        "product_name": row.product_name,
        "status": ItemStatus(row.status),
        "channel": Channel(row.channel),
        "price": int(row.price),
        "cost": int(row.total_cost),
    }


def _day(value) -> Optional[date]:
    return None if pd.isna(value) else pd.Timestamp(value).date()


def aging_alerts(frame: pd.DataFrame, now: Union[date, datetime], threshold_days: int, limit: int) -> AgingAlerts:
    """Active items held for at least `threshold_days`, oldest first."""
    today = calendar_day(now)
    active = frame["status"].isin([status.value for status in ACTIVE_STATUSES])
    matches = frame.loc[active & (frame["acquired_at"] <= today - pd.Timedelta(days=threshold_days))]
    matches = matches.sort_values("acquired_at", kind="stable")

    items = [
        AgingAlertItem(
            **_base_fields(row),
            acquired_at=_day(row.acquired_at),
            days_in_stock=max(0, (today - row.acquired_at).days),
        )
        for row in matches.head(limit).itertuples(index=False)
    ]
    return AgingAlerts(count=len(matches), threshold_days=threshold_days, items=items)


def stale_listing_alerts(frame: pd.DataFrame, now: Union[date, datetime], threshold_days: int, limit: int) -> StaleListingAlerts:
    """LISTED items first listed at least `threshold_days` ago, longest listed first."""
    today = calendar_day(now)
    listed = (frame["status"] == ItemStatus.LISTED.value) & frame["listed_at"].notna()
    matches = frame.loc[listed & (frame["listed_at"] <= today - pd.Timedelta(days=threshold_days))]
    matches = matches.sort_values("listed_at", kind="stable")

    items = [
        StaleListingAlertItem(
            **_base_fields(row),
            listed_at=_day(row.listed_at),
            days_listed=max(0, (today - row.listed_at).days),
        )
        for row in matches.head(limit).itertuples(index=False)
    ]
    return StaleListingAlerts(count=len(matches), threshold_days=threshold_days, items=items)


def low_margin_alerts(frame: pd.DataFrame, minimum_margin_percent: float, limit: int) -> LowMarginAlerts:
    """Sold items whose margin percent is under the minimum, thinnest margin first."""
    sold = frame.loc[(frame["status"] == ItemStatus.SOLD.value) & (frame["price"] > 0)]
    sold = sold.assign(margin_percent=sold["profit"] / sold["price"] * 100)
    matches = sold.loc[sold["margin_percent"] < minimum_margin_percent]
    matches = matches.sort_values("margin_percent", kind="stable")

    items = [
        LowMarginAlertItem(
            **_base_fields(row),
            sold_at=_day(row.sold_at),
            margin_percent=float(row.margin_percent),
            margin_amount=int(row.profit),
        )
        for row in matches.head(limit).itertuples(index=False)
    ]
    return LowMarginAlerts(count=len(matches), threshold_percent=minimum_margin_percent, items=items)


def compute_alerts(
    frame: pd.DataFrame,
    now: Union[date, datetime],
    aging_threshold_days: Optional[int] = None,
    stale_threshold_days: Optional[int] = None,
    minimum_margin_percent: Optional[float] = None,
    limit: Optional[int] = None,
) -> AlertsSummary:
    """
    Aging, stale listing and low margin alerts over the full record frame.

    Thresholds default to the configured business rules; `limit` caps the
    items per list (clamped to 1..20) while counts cover every match.
    """
    config = get_config()
    if aging_threshold_days is None:
        aging_threshold_days = config.aging_alert_threshold_days
    if stale_threshold_days is None:
        stale_threshold_days = config.stale_listing_threshold_days
    if minimum_margin_percent is None:
        minimum_margin_percent = config.minimum_margin_percent
    if limit is None:
        limit = config.alert_item_limit
    limit = max(1, min(int(limit), MAX_ALERT_ITEMS))

    return AlertsSummary(
        aging=aging_alerts(frame, now, aging_threshold_days, limit),
        stale=stale_listing_alerts(frame, now, stale_threshold_days, limit),
        margin=low_margin_alerts(frame, minimum_margin_percent, limit),
    )
