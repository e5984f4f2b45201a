from datetime import date, datetime, timezone

from resale_reports.analytics.filters import (
    deserialize_filters,
    raw_filters_from_query,
    resolve_channels,
    resolve_category,
    resolve_filters,
    serialize_filters,
)
from resale_reports.config import set_config_for_test
from resale_reports.data.models import Channel, RawReportFilters


def test_defaults_to_90_day_window_and_all_channels(now):
    filters = resolve_filters(None, now)
    assert filters.start_date == datetime(2024, 4, 2)
    assert filters.end_date == datetime(2024, 6, 30, 23, 59, 59, 999999)
    assert filters.channels == list(Channel)
    assert filters.category is None


def test_default_window_follows_config(now):
    set_config_for_test(_env_file=None, default_range_days=30)
    filters = resolve_filters(RawReportFilters(), now)
    assert filters.start_date == datetime(2024, 6, 1)


def test_explicit_dates_are_normalized_to_whole_days(now):
    raw = RawReportFilters(start="2024-01-15T13:45:00", end=date(2024, 2, 10))
    filters = resolve_filters(raw, now)
    assert filters.start_date == datetime(2024, 1, 15)
    assert filters.end_date == datetime(2024, 2, 10, 23, 59, 59, 999999)


def test_unparseable_dates_fall_back_independently(now):
    filters = resolve_filters(RawReportFilters(start="not-a-date", end="2024-05-31"), now)
    assert filters.start_date == datetime(2024, 4, 2)
    assert filters.end_date.date() == date(2024, 5, 31)


def test_end_before_start_is_kept(now):
    filters = resolve_filters(RawReportFilters(start="2024-05-10", end="2024-05-01"), now)
    assert filters.start_date > filters.end_date


def test_channel_tokens_match_value_or_name():
    assert resolve_channels("marketplace,ONLINE_STORE") == [Channel.ONLINE_STORE, Channel.MARKETPLACE]
    assert resolve_channels(["Wholesale", "wholesale"]) == [Channel.WHOLESALE]


def test_unknown_channels_are_dropped():
    assert resolve_channels(["Wholesale", "Flea Market"]) == [Channel.WHOLESALE]
    assert resolve_channels("Flea Market") == list(Channel)
    assert resolve_channels([]) == list(Channel)
    assert resolve_channels(" , ") == list(Channel)


def test_category_resolution():
    assert resolve_category("Home", ["Home", "Apparel"]) == "Home"
    assert resolve_category("Garden", ["Home", "Apparel"]) is None
    assert resolve_category("Garden") == "Garden"
    assert resolve_category("   ") is None


def test_query_mapping_aliases(now):
    params = {"from": "2024-03-01", "to": ["2024-03-31"], "channel": ["Retail Shop"], "categoryId": "Home"}
    raw = raw_filters_from_query(params)
    assert raw.start == "2024-03-01"
    assert raw.end == "2024-03-31"
    assert raw.channels == ["Retail Shop"]

    filters = resolve_filters(params, now, categories=["Home"])
    assert filters.start_date == datetime(2024, 3, 1)
    assert filters.channels == [Channel.RETAIL_SHOP]
    assert filters.category == "Home"


def test_serialize_round_trip(now):
    filters = resolve_filters(RawReportFilters(start="2024-02-01", end="2024-02-29", channels="Marketplace"), now)
    serialized = serialize_filters(filters)
    assert serialized.model_dump(by_alias=True, mode="json") == {
        "from": "2024-02-01",
        "to": "2024-02-29",
        "channels": ["Marketplace"],
        "category": None,
    }
    assert deserialize_filters(serialized.model_dump(by_alias=True)) == filters


def test_timezone_aware_now_resolves_to_naive_window():
    now = datetime(2024, 6, 30, 23, 30, tzinfo=timezone.utc)
    filters = resolve_filters(None, now)
    assert filters.start_date == datetime(2024, 4, 2)
    assert filters.end_date == datetime(2024, 6, 30, 23, 59, 59, 999999)
    assert filters.start_date.tzinfo is None


def test_offset_date_strings_keep_their_calendar_day(now):
    filters = resolve_filters(RawReportFilters(start="2024-01-01T00:00+03:00", end="2024-01-31T23:00-05:00"), now)
    assert filters.start_date == datetime(2024, 1, 1)
    assert filters.end_date.date() == date(2024, 1, 31)


def test_scalar_channel_values_do_not_raise():
    assert raw_filters_from_query({"channels": 5}).channels == ["5"]
    assert resolve_filters({"channels": 5}, date(2024, 6, 30)).channels == list(Channel)
    assert resolve_filters({"channel": {"Wholesale"}}, date(2024, 6, 30)).channels == [Channel.WHOLESALE]
