from __future__ import annotations

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from .records import Channel, ItemStatus


class AlertItemBase(BaseModel):
    item_id: str = Field(description="Item identifier")
    product_name: str = Field(description="Product name")
    status: ItemStatus = Field(description="Current lifecycle status")
    channel: Channel = Field(description="Listing/sales channel")
    price: int = Field(description="Sale or reference price")
    cost: int = Field(description="cost + refurb_cost")


class AgingAlertItem(AlertItemBase):
    acquired_at: date
    days_in_stock: int


class StaleListingAlertItem(AlertItemBase):
    listed_at: Optional[date] = None
    days_listed: int


class LowMarginAlertItem(AlertItemBase):
    sold_at: Optional[date] = None
    margin_percent: float
    margin_amount: int


class AgingAlerts(BaseModel):
    count: int
    threshold_days: int
    items: List[AgingAlertItem]


class StaleListingAlerts(BaseModel):
    count: int
    threshold_days: int
    items: List[StaleListingAlertItem]


class LowMarginAlerts(BaseModel):
    count: int
    threshold_percent: float
    items: List[LowMarginAlertItem]


class AlertsSummary(BaseModel):
    aging: AgingAlerts
    stale: StaleListingAlerts
    margin: LowMarginAlerts
