from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

import pandas as pd
from pydantic import BaseModel, Field

from ..config import AppConfig, get_config
from ..data.models import InventoryRecord, RawReportFilters, ReportBundle
from ..logging import get_logger
from . import aggregations
from .filters import resolve_filters, serialize_filters
from .selection import WorkingSets, records_frame, select_records


class ReportSettings(BaseModel):
    """Business rules handed to the aggregations. They are inputs, never computed here."""
    aging_bucket_width_days: int = Field(default=aggregations.AGING_BUCKET_WIDTH_DAYS, gt=0)
    aging_bucket_count: int = Field(default=aggregations.AGING_BUCKET_COUNT, gt=0)
    minimum_margin_percent: float = Field(default=20.0, ge=0, le=100)
    top_products_limit: int = Field(default=aggregations.TOP_PRODUCTS_LIMIT, ge=0)
    top_categories_limit: int = Field(default=aggregations.TOP_CATEGORIES_LIMIT, ge=0)
    price_margin_limit: Optional[int] = Field(default=None, ge=0)
    default_range_days: int = Field(default=90, gt=0)
    parallel: bool = False
    max_workers: int = Field(default=4, gt=0)

    @classmethod
    def from_config(cls, config: Optional[AppConfig] = None) -> "ReportSettings":
        config = config or get_config()
        return cls(
            aging_bucket_width_days=config.aging_bucket_width_days,
            aging_bucket_count=config.aging_bucket_count,
            minimum_margin_percent=config.minimum_margin_percent,
            top_products_limit=config.top_products_limit,
            top_categories_limit=config.top_categories_limit,
            price_margin_limit=config.price_margin_limit,
            default_range_days=config.default_range_days,
            parallel=config.parallel_aggregations,
            max_workers=config.aggregation_workers,
        )


def _aggregation_tasks(
    sets: WorkingSets,
    now: Union[date, datetime],
    settings: ReportSettings,
) -> Dict[str, Callable[[], Any]]:
    acquired, sold, filters = sets.acquired, sets.sold, sets.filters
    return {
        "monthly": lambda: aggregations.monthly_financials(sold, filters),
        "rolling": lambda: aggregations.rolling_trend(sold, filters),
        "channel_mix": lambda: aggregations.channel_mix(sold),
        "inventory_by_status": lambda: aggregations.inventory_by_status(acquired),
        "top_categories": lambda: aggregations.top_categories(acquired, settings.top_categories_limit),
        "top_products": lambda: aggregations.top_products(sold, settings.top_products_limit),
        "sell_through": lambda: aggregations.sell_through(acquired, sold),
        "listing_funnel": lambda: aggregations.listing_funnel(acquired),
        "aging": lambda: aggregations.aging_histogram(
            acquired, now, settings.aging_bucket_width_days, settings.aging_bucket_count
        ),
        "repair": lambda: aggregations.repair_roi(sold),
        "price_vs_margin": lambda: aggregations.price_vs_margin(
            sold, settings.price_margin_limit, settings.minimum_margin_percent
        ),
    }


def build_report(
    records: Union[Iterable[InventoryRecord], pd.DataFrame],
    raw_filters: Union[RawReportFilters, Mapping[str, Any], None],
    now: Union[date, datetime],
    categories: Optional[Iterable[str]] = None,
    settings: Optional[ReportSettings] = None,
) -> ReportBundle:
    """
    Compute every report table for one request.

    Args:
        records: Full record set from the storage layer (records or a frame from `records_frame`).
        raw_filters: Requested filter, resolved with the usual defaulting rules.
        now: Analysis reference day; the default window and aging use it.
        categories: Known categories for filter resolution.
        settings: Business rules; read from config when None.

    The aggregations share nothing mutable, so `settings.parallel` may run them
    on a thread pool; the result is the same either way.
    """
    logger = get_logger(__name__)
    settings = settings or ReportSettings.from_config()

    frame = records if isinstance(records, pd.DataFrame) else records_frame(records)
    filters = resolve_filters(raw_filters, now, categories, settings.default_range_days)
    sets = select_records(frame, filters)
    logger.info(
        f"Building report for {filters.start_date.date()}..{filters.end_date.date()}: "
        f"{len(sets.acquired)} acquired, {len(sets.sold)} sold of {len(frame)} records"
    )

    tasks = _aggregation_tasks(sets, now, settings)
    if settings.parallel:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
            futures = {name: pool.submit(task) for name, task in tasks.items()}
            results = {name: future.result() for name, future in futures.items()}
    else:
        results = {name: task() for name, task in tasks.items()}

    return ReportBundle(filters=serialize_filters(filters), **results)
