"""
Report filter resolution.

Turns a loosely typed, query-string style filter into a ReportFilter:
- missing, empty or unknown channels -> every channel
- unknown category -> no category filter
- missing or unparseable dates -> the default window ending at `now`
- start -> start of day, end -> end of day (the whole end day is included)

Resolution never raises. An end before the start is kept as is and simply
selects nothing.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from ..config import get_config
from ..data.models import Channel, RawReportFilters, ReportFilter, SerializedFilters
from ..logging import get_logger

_QUERY_KEYS = {
    "start": ("start", "from", "startDate"),
    "end": ("end", "to", "endDate"),
    "channels": ("channels", "channel"),
    "category": ("category", "categoryId"),
}

_CHANNEL_LOOKUP = {
    **{channel.value.lower(): channel for channel in Channel},
    **{channel.name.lower(): channel for channel in Channel},
}


def calendar_day(value: Union[date, datetime, pd.Timestamp]) -> pd.Timestamp:
    """Midnight of the wall-clock day of `value`, timezone dropped (not converted)."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is not None:
        ts = ts.tz_localize(None)
    return ts.normalize()


def start_of_day(value: Union[date, datetime, pd.Timestamp]) -> datetime:
    return calendar_day(value).to_pydatetime()


def end_of_day(value: Union[date, datetime, pd.Timestamp]) -> datetime:
    ts = calendar_day(value) + pd.Timedelta(days=1) - pd.Timedelta(microseconds=1)
    return ts.to_pydatetime()


def raw_filters_from_query(params: Mapping[str, Any]) -> RawReportFilters:
    """Build RawReportFilters from query-string style key/value pairs (repeated keys as lists)."""
    values: dict[str, Any] = {}
    for field, keys in _QUERY_KEYS.items():
        for key in keys:
            if params.get(key) not in (None, "", []):
                values[field] = params[key]
                break

    for field in ("start", "end", "category"):
        value = values.get(field)
        if isinstance(value, (list, tuple)):
            value = value[0] if value else None
        if value is not None and not isinstance(value, (date, datetime, str)):
            value = str(value)
        values[field] = value

    channels = values.get("channels")
    if isinstance(channels, (list, tuple, set, frozenset)):
        values["channels"] = [str(token) for token in channels]
    elif channels is not None and not isinstance(channels, str):
        values["channels"] = [str(channels)]

    return RawReportFilters(**values)


def _parse_day(value: Any) -> Optional[pd.Timestamp]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return calendar_day(ts)


def _channel_tokens(requested: Union[str, Iterable[str], None]) -> List[str]:
    if requested is None:
        return []
    if isinstance(requested, str):
        requested = [requested]
    tokens: List[str] = []
    for entry in requested:
        tokens.extend(part.strip() for part in str(entry).split(","))
    return [token for token in tokens if token]


def resolve_channels(requested: Union[str, Iterable[str], None]) -> List[Channel]:
    """Known channels from the request in canonical order; every channel when none survive."""
    logger = get_logger(__name__)
    picked = set()
    for token in _channel_tokens(requested):
        channel = _CHANNEL_LOOKUP.get(token.lower())
        if channel is None:
            logger.debug(f"Ignoring unknown channel filter value: {token!r}")
            continue
        picked.add(channel)
    if not picked:
        return list(Channel)
    return [channel for channel in Channel if channel in picked]


def resolve_category(requested: Optional[str], categories: Optional[Iterable[str]] = None) -> Optional[str]:
    if requested is None or not requested.strip():
        return None
    category = requested.strip()
    if categories is not None and category not in set(categories):
        get_logger(__name__).debug(f"Ignoring unknown category filter value: {category!r}")
        return None
    return category


def resolve_filters(
    raw: Union[RawReportFilters, Mapping[str, Any], None],
    now: Union[date, datetime],
    categories: Optional[Iterable[str]] = None,
    default_range_days: Optional[int] = None,
) -> ReportFilter:
    """
    Resolve a partially specified filter into a ReportFilter.

    Args:
        raw: RawReportFilters, a query-string style mapping, or None for all defaults.
        now: Reference day of the analysis; the default window ends on it.
        categories: Known categories. When None any non-blank category is accepted.
        default_range_days: Length of the default window; read from config when None.
    """
    if raw is None:
        raw = RawReportFilters()
    elif not isinstance(raw, RawReportFilters):
        raw = raw_filters_from_query(raw)

    if default_range_days is None:
        default_range_days = get_config().default_range_days
    default_range_days = max(int(default_range_days), 1)

    today = calendar_day(now)
    start = _parse_day(raw.start)
    end = _parse_day(raw.end)
    if start is None:
        start = today - pd.Timedelta(days=default_range_days - 1)
    if end is None:
        end = today

    return ReportFilter(
        start_date=start_of_day(start),
        end_date=end_of_day(end),
        channels=resolve_channels(raw.channels),
        category=resolve_category(raw.category, categories),
    )


def serialize_filters(filters: ReportFilter) -> SerializedFilters:
    return SerializedFilters(
        from_date=filters.start_date.date(),
        to_date=filters.end_date.date(),
        channels=list(filters.channels),
        category=filters.category,
    )


def deserialize_filters(value: Union[SerializedFilters, Mapping[str, Any]]) -> ReportFilter:
    if not isinstance(value, SerializedFilters):
        value = SerializedFilters.model_validate(value)
    return ReportFilter(
        start_date=start_of_day(value.from_date),
        end_date=end_of_day(value.to_date),
        channels=list(value.channels) or list(Channel),
        category=value.category,
    )
