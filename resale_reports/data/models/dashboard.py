from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .metrics import MonthlyFinancial


class StatusSummary(BaseModel):
    count: int = Field(default=0, description="Number of units")
    total_cost: int = Field(default=0, description="SUM(cost + refurb_cost)")


class InventoryBreakdownRow(BaseModel):
    """Active inventory of one category (or the folded 'Other' row), split by status."""
    category: str = Field(description="Product category, 'Other' for the folded tail")
    statuses: Dict[str, StatusSummary] = Field(description="Count and value per active status")
    total_count: int = Field(description="Units across statuses")
    total_cost: int = Field(description="Value across statuses")


class InventoryBreakdownTotals(BaseModel):
    statuses: Dict[str, StatusSummary]
    total_count: int
    total_cost: int


class InventoryBreakdown(BaseModel):
    rows: List[InventoryBreakdownRow]
    grand_totals: InventoryBreakdownTotals


class ThresholdAgingBucket(BaseModel):
    """Aging bucket bounded by the configured cutoffs; inclusive on both ends."""
    label: str = Field(description="Bucket label, e.g. 0-30 or 181+")
    min_days: int = Field(description="First day covered")
    max_days: Optional[int] = Field(default=None, description="Last day covered, None for the open bucket")
    threshold: Optional[int] = Field(default=None, description="Cutoff closing the bucket")
    count: int = 0
    total_value: int = 0


class AgingBuckets(BaseModel):
    buckets: List[ThresholdAgingBucket]
    thresholds: Tuple[int, int, int]


class WatchlistItem(BaseModel):
    item_id: str
    product_name: str
    acquired_at: date
    cost: int = Field(description="cost + refurb_cost")
    price: int = Field(description="Reference listing price")
    days_in_stock: int


class AgingWatchlist(BaseModel):
    warning: List[WatchlistItem]
    critical: List[WatchlistItem]
    warning_threshold: int
    critical_threshold: int


class MonthlyPnl(BaseModel):
    """Profit and loss of the last `months` calendar months, current month included."""
    months: int
    points: List[MonthlyFinancial]
