from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Channel(str, Enum):
    """Sales/listing venues. The declaration order is the canonical report order."""
    ONLINE_STORE = "Online Store"
    RETAIL_SHOP = "Retail Shop"
    MARKETPLACE = "Marketplace"
    WHOLESALE = "Wholesale"
    SOCIAL_COMMERCE = "Social Commerce"


class ItemStatus(str, Enum):
    IN_STOCK = "IN_STOCK"
    LISTED = "LISTED"
    RESERVED = "RESERVED"
    REPAIR = "REPAIR"
    SOLD = "SOLD"


# Statuses counted as sellable stock on the dashboard (REPAIR is excluded).
ACTIVE_STATUSES = (ItemStatus.IN_STOCK, ItemStatus.LISTED, ItemStatus.RESERVED)

# Statuses that still hold value in inventory.
ON_HAND_STATUSES = (ItemStatus.IN_STOCK, ItemStatus.LISTED, ItemStatus.RESERVED, ItemStatus.REPAIR)


class InventoryRecord(BaseModel):
    """One physical unit of saleable stock, as handed over by the storage layer.

    Money fields are integers in the smallest currency unit. `price` is the sale
    price once sold and a reference listing/valuation price before that.
    """
    model_config = ConfigDict(frozen=True)

    item_id: str = Field(description="Unique item identifier")
    product_id: str = Field(description="Product identifier")
    product_name: str = Field(description="Denormalized product name")
    category: str = Field(description="Denormalized product category")
    channel: Channel = Field(description="Listing/sales channel")
    status: ItemStatus = Field(description="Current lifecycle status")
    acquired_at: date = Field(description="Date the unit entered inventory")
    listed_at: Optional[date] = Field(default=None, description="Date first listed, if ever")
    sold_at: Optional[date] = Field(default=None, description="Date of sale, present iff SOLD")
    price: int = Field(ge=0, description="Sale price, or reference price while unsold")
    cost: int = Field(ge=0, description="Purchase price plus allocated fees")
    refurb_cost: int = Field(default=0, ge=0, description="Repair/refurbishment cost")

    @model_validator(mode="after")
    def _check_sale_state(self) -> "InventoryRecord":
        if (self.sold_at is not None) != (self.status == ItemStatus.SOLD):
            raise ValueError("sold_at must be set if and only if status is SOLD")
        return self

    @property
    def total_cost(self) -> int:
        return self.cost + self.refurb_cost

    @property
    def profit(self) -> int:
        return self.price - self.total_cost

    @property
    def margin(self) -> float:
        return self.profit / self.price if self.price > 0 else 0.0
