from .records import (
    Channel,
    ItemStatus,
    InventoryRecord,
    ACTIVE_STATUSES,
    ON_HAND_STATUSES,
)
from .data_filters import (
    RawReportFilters,
    ReportFilter,
    SerializedFilters,
    RecordFilters,
)
from .metrics import (
    MonthlyFinancial,
    RollingTrendPoint,
    ChannelMixEntry,
    InventoryByStatusEntry,
    CategoryInventoryEntry,
    ProductProfitEntry,
    SellThroughEntry,
    ListingStage,
    ListingFunnelEntry,
    AgingBucketEntry,
    RepairStats,
    RepairUplift,
    RepairRoi,
    PriceMarginPoint,
    ReportBundle,
    RollingAverage,
    KpiTotals,
)
from .dashboard import (
    StatusSummary,
    InventoryBreakdownRow,
    InventoryBreakdownTotals,
    InventoryBreakdown,
    ThresholdAgingBucket,
    AgingBuckets,
    WatchlistItem,
    AgingWatchlist,
    MonthlyPnl,
)
from .alerts import (
    AgingAlertItem,
    StaleListingAlertItem,
    LowMarginAlertItem,
    AgingAlerts,
    StaleListingAlerts,
    LowMarginAlerts,
    AlertsSummary,
)
from .list_response import (
    StringList,
    DateBounds,
)

__all__ = [
    # Record model
    "Channel",
    "ItemStatus",
    "InventoryRecord",
    "ACTIVE_STATUSES",
    "ON_HAND_STATUSES",
    # Filter classes
    "RawReportFilters",
    "ReportFilter",
    "SerializedFilters",
    "RecordFilters",
    # Report tables
    "MonthlyFinancial",
    "RollingTrendPoint",
    "ChannelMixEntry",
    "InventoryByStatusEntry",
    "CategoryInventoryEntry",
    "ProductProfitEntry",
    "SellThroughEntry",
    "ListingStage",
    "ListingFunnelEntry",
    "AgingBucketEntry",
    "RepairStats",
    "RepairUplift",
    "RepairRoi",
    "PriceMarginPoint",
    "ReportBundle",
    "RollingAverage",
    "KpiTotals",
    # Dashboard
    "StatusSummary",
    "InventoryBreakdownRow",
    "InventoryBreakdownTotals",
    "InventoryBreakdown",
    "ThresholdAgingBucket",
    "AgingBuckets",
    "WatchlistItem",
    "AgingWatchlist",
    "MonthlyPnl",
    # Alerts
    "AgingAlertItem",
    "StaleListingAlertItem",
    "LowMarginAlertItem",
    "AgingAlerts",
    "StaleListingAlerts",
    "LowMarginAlerts",
    "AlertsSummary",
    # List response models
    "StringList",
    "DateBounds",
]
