from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from .data_filters import SerializedFilters
from .records import Channel


class MonthlyFinancial(BaseModel):
    """Revenue, cost and profit of the units sold in one calendar month."""
    month: str = Field(description="Month key, YYYY-MM")
    revenue: int = Field(description="SUM(price)")
    cost: int = Field(description="SUM(cost + refurb_cost)")
    profit: int = Field(description="revenue - cost")


class RollingTrendPoint(BaseModel):
    """Daily profit with its trailing 30- and 60-day simple moving averages."""
    date: str = Field(description="Day, YYYY-MM-DD")
    profit: int = Field(description="Profit of the units sold that day")
    rolling_30: float = Field(description="Mean daily profit over up to 30 trailing days")
    rolling_60: float = Field(description="Mean daily profit over up to 60 trailing days")


class ChannelMixEntry(BaseModel):
    channel: Channel = Field(description="Sales channel")
    revenue: int = Field(description="SUM(price) for the channel")
    percentage: float = Field(description="Share of total revenue, 0-100")


class InventoryByStatusEntry(BaseModel):
    """Value of non-sold inventory in one channel, split by status."""
    channel: Channel = Field(description="Listing channel")
    statuses: Dict[str, int] = Field(description="Total cost per non-sold status")
    total: int = Field(description="Total cost across statuses")


class CategoryInventoryEntry(BaseModel):
    category: str = Field(description="Product category")
    value: int = Field(description="Total cost of non-sold inventory")


class ProductProfitEntry(BaseModel):
    """Sales performance of one product in the report window."""
    product_id: str = Field(description="Product identifier")
    product_name: str = Field(description="Product name")
    category: str = Field(description="Product category")
    channels: List[Channel] = Field(description="Distinct channels the product sold through")
    units_sold: int = Field(description="Number of units sold")
    revenue: int = Field(description="SUM(price)")
    cost: int = Field(description="SUM(cost + refurb_cost)")
    profit: int = Field(description="revenue - cost")
    average_profit: int = Field(description="profit / units_sold, rounded")
    median_sold_price: int = Field(description="Median sale price, rounded")


class SellThroughEntry(BaseModel):
    category: str = Field(description="Product category")
    sold: int = Field(description="Units sold in the window")
    total: int = Field(description="Units acquired in the window (at least 1 when sold > 0)")
    rate: float = Field(description="sold / total")


ListingStage = Literal["IN_STOCK", "LISTED", "SOLD"]


class ListingFunnelEntry(BaseModel):
    stage: ListingStage = Field(description="Funnel stage")
    count: int = Field(description="Number of units currently in the stage")


class AgingBucketEntry(BaseModel):
    label: str = Field(description="Bucket label, e.g. 0-9 or 110+")
    range_start: int = Field(description="First day covered by the bucket")
    range_end: Optional[int] = Field(default=None, description="Last day covered, None for the overflow bucket")
    count: int = Field(description="Number of units")
    total_value: int = Field(description="SUM(cost + refurb_cost)")


class RepairStats(BaseModel):
    label: Literal["Refurbished", "Standard"] = Field(description="Partition label")
    count: int = Field(description="Units sold")
    revenue: int = Field(description="SUM(price)")
    cost: int = Field(description="SUM(cost + refurb_cost)")
    profit: int = Field(description="revenue - cost")
    margin: float = Field(description="profit / revenue, 0 when revenue is 0")


class RepairUplift(BaseModel):
    """Profit of refurbished units against the average standard unit of the same product."""
    refurb_count: int = Field(description="Refurbished units sold")
    total_refurb_cost: int = Field(description="SUM(refurb_cost) of refurbished units")
    total_refurb_profit: int = Field(description="SUM(profit) of refurbished units")
    peer_baseline_profit: int = Field(description="SUM of the standard average profit of each refurbished unit's product")
    extra_margin: int = Field(description="total_refurb_profit - peer_baseline_profit")
    average_extra_margin_per_item: int = Field(description="extra_margin / refurb_count, rounded")


class RepairRoi(BaseModel):
    refurbished: RepairStats
    standard: RepairStats
    uplift: RepairUplift


class PriceMarginPoint(BaseModel):
    item_id: str
    product_id: str
    product_name: str
    category: str
    channel: Channel
    price: int
    profit: int
    margin: float
    below_minimum_margin: bool = Field(default=False, description="Display flag: margin under the configured minimum")


class ReportBundle(BaseModel):
    """Every report table for one resolved filter, plus the filter echo."""
    filters: SerializedFilters
    monthly: List[MonthlyFinancial]
    rolling: List[RollingTrendPoint]
    channel_mix: List[ChannelMixEntry]
    inventory_by_status: List[InventoryByStatusEntry]
    top_categories: List[CategoryInventoryEntry]
    top_products: List[ProductProfitEntry]
    sell_through: List[SellThroughEntry]
    listing_funnel: List[ListingFunnelEntry]
    aging: List[AgingBucketEntry]
    repair: RepairRoi
    price_vs_margin: List[PriceMarginPoint]


class RollingAverage(BaseModel):
    average_daily_profit: float = Field(description="Profit in the window / window days")
    average_daily_units: float = Field(description="Units sold in the window / window days")


class KpiTotals(BaseModel):
    """Headline dashboard KPIs computed over the full record set."""
    inventory_value: int            # SUM(cost + refurb_cost) of active items
    items_in_stock: int             # COUNT(status = IN_STOCK)
    average_days_in_stock: float    # mean holding age of active items
    profit_month_to_date: int       # SUM(profit) sold since the start of the month
    days_30: RollingAverage
    days_60: RollingAverage
