from .filters import (
    resolve_filters,
    raw_filters_from_query,
    serialize_filters,
    deserialize_filters,
)
from .selection import WorkingSets, records_frame, select_records
from .aggregations import (
    monthly_financials,
    rolling_trend,
    channel_mix,
    inventory_by_status,
    top_categories,
    top_products,
    sell_through,
    listing_funnel,
    aging_histogram,
    repair_roi,
    price_vs_margin,
)
from .report import ReportSettings, build_report
from .kpis import compute_kpis
from .alerts import compute_alerts
from .dashboard import aging_buckets, aging_watchlist, inventory_breakdown, monthly_pnl

__all__ = [
    # Filters and selection
    "resolve_filters",
    "raw_filters_from_query",
    "serialize_filters",
    "deserialize_filters",
    "WorkingSets",
    "records_frame",
    "select_records",
    # Aggregations
    "monthly_financials",
    "rolling_trend",
    "channel_mix",
    "inventory_by_status",
    "top_categories",
    "top_products",
    "sell_through",
    "listing_funnel",
    "aging_histogram",
    "repair_roi",
    "price_vs_margin",
    # Bundles
    "ReportSettings",
    "build_report",
    "compute_kpis",
    "compute_alerts",
    # Dashboard
    "inventory_breakdown",
    "aging_buckets",
    "aging_watchlist",
    "monthly_pnl",
]
