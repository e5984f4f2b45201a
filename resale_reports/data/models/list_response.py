from __future__ import annotations

from datetime import date
from typing import List

from pydantic import BaseModel, Field


class StringList(BaseModel):
    """Generic container for lists of unique string values."""
    values: List[str] = Field(description="List of unique string values")


class DateBounds(BaseModel):
    """Earliest and latest activity dates in the record set."""
    start_date: date = Field(description="Earliest acquisition date")
    end_date: date = Field(description="Latest acquisition or sale date")
