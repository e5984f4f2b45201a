from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .records import Channel, ItemStatus


class RawReportFilters(BaseModel):
    """Report filters as they arrive from a query string; every field is optional and untrusted."""
    start: Optional[Union[date, datetime, str]] = Field(default=None, description="Start of the report window")
    end: Optional[Union[date, datetime, str]] = Field(default=None, description="End of the report window (inclusive day)")
    channels: Optional[Union[str, List[str]]] = Field(default=None, description="Channel filter (single channel or list of channels)")
    category: Optional[str] = Field(default=None, description="Category filter")


class ReportFilter(BaseModel):
    """Fully resolved report filter. Channels are never empty."""
    model_config = ConfigDict(frozen=True)

    start_date: datetime = Field(description="Start of the first day in the window")
    end_date: datetime = Field(description="End of the last day in the window")
    channels: List[Channel] = Field(min_length=1, description="Channels included in the report")
    category: Optional[str] = Field(default=None, description="Category filter, None for all categories")


class SerializedFilters(BaseModel):
    """Query-string friendly echo of a resolved filter."""
    from_date: date = Field(alias="from", description="First day of the window")
    to_date: date = Field(alias="to", description="Last day of the window")
    channels: List[Channel] = Field(description="Channels included in the report")
    category: Optional[str] = Field(default=None, description="Category filter, None for all categories")

    model_config = ConfigDict(populate_by_name=True)


class RecordFilters(BaseModel):
    """Filters for the record source read API."""
    acquired_from: Optional[datetime] = Field(default=None, description="Start of acquisition date range")
    acquired_to: Optional[datetime] = Field(default=None, description="End of acquisition date range")
    status: Optional[ItemStatus | list[ItemStatus]] = Field(default=None, description="Status filter (single status or list of statuses)")
    channel: Optional[Channel | list[Channel]] = Field(default=None, description="Channel filter (single channel or list of channels)")
    category: Optional[str | list[str]] = Field(default=None, description="Category filter (single category or list of categories)")
