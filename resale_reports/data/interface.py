from __future__ import annotations

from typing import List, Optional, Protocol

from .models import DateBounds, InventoryRecord, RecordFilters, StringList


# ---- Record source protocol ----

class RecordSource(Protocol):
    """
    Read-only storage contract the reporting engine consumes.

    IMPORTANT:
    - Implementations MUST avoid result caching inside these methods.
      Each call should run a fresh filter pass over the underlying source.
    - Returned records are immutable snapshots; the engine never writes back.
    """

    # Queries to populate dropdowns and filters

    def get_date_bounds(self) -> Optional[DateBounds]:
        """Get the earliest and latest activity date, or None when there are no records."""
        ...

    def list_channels(self) -> StringList:
        """List the channels that appear in the records."""
        ...

    def list_categories(self) -> StringList:
        """List all product categories."""
        ...

    # Record queries

    def get_records(self, filters: Optional[RecordFilters] = None) -> List[InventoryRecord]:
        """Get inventory records matching the filters (all records when None)."""
        ...
