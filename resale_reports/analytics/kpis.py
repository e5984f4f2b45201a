"""
Headline dashboard KPIs.

Unlike the report tables these look at the whole record set as of `now`,
not at a filtered window.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

import pandas as pd

from ..data.models import ACTIVE_STATUSES, ItemStatus, KpiTotals, RollingAverage
from .filters import calendar_day
from .stats import average


def _sold(frame: pd.DataFrame) -> pd.DataFrame:
    return frame.loc[(frame["status"] == ItemStatus.SOLD.value) & frame["sold_at"].notna()]


def rolling_average(frame: pd.DataFrame, now: Union[date, datetime], days: int) -> RollingAverage:
    """Profit and units sold in the `days` days ending on `now`, divided by `days`."""
    today = calendar_day(now)
    sold = _sold(frame)
    window = sold.loc[sold["sold_at"].between(today - pd.Timedelta(days=days - 1), today)]
    return RollingAverage(
        average_daily_profit=int(window["profit"].sum()) / days,
        average_daily_units=len(window) / days,
    )


def compute_kpis(frame: pd.DataFrame, now: Union[date, datetime]) -> KpiTotals:
    today = calendar_day(now)

    active = frame.loc[frame["status"].isin([status.value for status in ACTIVE_STATUSES])]
    ages = (today - active["acquired_at"]).dt.days.clip(lower=0)
    average_days = average(int(age) for age in ages)

    sold = _sold(frame)
    this_month = (sold["sold_at"].dt.year == today.year) & (sold["sold_at"].dt.month == today.month)

    return KpiTotals(
        inventory_value=int(active["total_cost"].sum()),
        items_in_stock=int((frame["status"] == ItemStatus.IN_STOCK.value).sum()),
        average_days_in_stock=average_days,
        profit_month_to_date=int(sold.loc[this_month, "profit"].sum()),
        days_30=rolling_average(frame, now, 30),
        days_60=rolling_average(frame, now, 60),
    )
