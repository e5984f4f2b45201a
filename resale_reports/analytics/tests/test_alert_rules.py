from datetime import date, datetime, timezone

import pytest

from resale_reports.analytics.alerts import MAX_ALERT_ITEMS, compute_alerts
from resale_reports.analytics.selection import records_frame
from resale_reports.config import set_config_for_test
from resale_reports.data.models import ItemStatus


def test_aging_alerts_oldest_first(make_record, now):
    frame = records_frame([
        make_record(item_id="young", status=ItemStatus.IN_STOCK, acquired_at=date(2024, 5, 1)),
        make_record(item_id="old", status=ItemStatus.LISTED, acquired_at=date(2023, 6, 1)),
        make_record(item_id="older", status=ItemStatus.RESERVED, acquired_at=date(2023, 1, 1)),
        make_record(item_id="repair", status=ItemStatus.REPAIR, acquired_at=date(2022, 1, 1)),
    ])
    alerts = compute_alerts(frame, now)

    assert alerts.aging.threshold_days == 180
    assert alerts.aging.count == 2
    assert [item.item_id for item in alerts.aging.items] == ["older", "old"]
    assert alerts.aging.items[1].days_in_stock == 395


def test_stale_listing_alerts(make_record, now):
    frame = records_frame([
        make_record(item_id="stale", status=ItemStatus.LISTED, listed_at=date(2024, 5, 1)),
        make_record(item_id="fresh", status=ItemStatus.LISTED, listed_at=date(2024, 6, 20)),
        make_record(item_id="unlisted", status=ItemStatus.LISTED),
        make_record(item_id="reserved", status=ItemStatus.RESERVED, listed_at=date(2024, 1, 1)),
    ])
    alerts = compute_alerts(frame, now)
    assert [item.item_id for item in alerts.stale.items] == ["stale"]
    assert alerts.stale.items[0].days_listed == 60


def test_low_margin_alerts(make_record, now):
    frame = records_frame([
        make_record(item_id="thin", sold_at=date(2024, 6, 1), price=1_000, cost=900),
        make_record(item_id="loss", sold_at=date(2024, 6, 2), price=1_000, cost=1_100),
        make_record(item_id="healthy", sold_at=date(2024, 6, 3), price=1_000, cost=500),
        make_record(item_id="free", sold_at=date(2024, 6, 4), price=0, cost=0),
    ])
    alerts = compute_alerts(frame, now)

    assert alerts.margin.threshold_percent == 20.0
    assert [item.item_id for item in alerts.margin.items] == ["loss", "thin"]
    assert alerts.margin.items[0].margin_percent == pytest.approx(-10.0)
    assert alerts.margin.items[0].margin_amount == -100


def test_limit_is_clamped_but_counts_are_complete(make_record, now):
    frame = records_frame([
        make_record(status=ItemStatus.IN_STOCK, acquired_at=date(2023, 1, 1)) for _ in range(25)
    ])
    assert len(compute_alerts(frame, now, limit=0).aging.items) == 1
    capped = compute_alerts(frame, now, limit=100)
    assert len(capped.aging.items) == MAX_ALERT_ITEMS
    assert capped.aging.count == 25


def test_thresholds_from_config(make_record, now):
    set_config_for_test(_env_file=None, aging_alert_threshold_days=30, alert_item_limit=2)
    frame = records_frame([
        make_record(status=ItemStatus.IN_STOCK, acquired_at=date(2024, 5, 1)) for _ in range(3)
    ])
    alerts = compute_alerts(frame, now)
    assert alerts.aging.threshold_days == 30
    assert alerts.aging.count == 3
    assert len(alerts.aging.items) == 2


def test_timezone_aware_now(make_record):
    frame = records_frame([
        make_record(item_id="old", status=ItemStatus.IN_STOCK, acquired_at=date(2023, 6, 1)),
        make_record(item_id="stale", status=ItemStatus.LISTED, listed_at=date(2024, 5, 1)),
    ])
    alerts = compute_alerts(frame, datetime(2024, 6, 30, tzinfo=timezone.utc))
    assert alerts.aging.items[0].days_in_stock == 395
    assert alerts.stale.items[0].days_listed == 60
