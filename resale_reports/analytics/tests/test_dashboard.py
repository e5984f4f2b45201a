from datetime import date, datetime, timedelta, timezone

from resale_reports.analytics.dashboard import (
    aging_buckets,
    aging_watchlist,
    inventory_breakdown,
    monthly_pnl,
)
from resale_reports.analytics.selection import records_frame
from resale_reports.config import set_config_for_test
from resale_reports.data.models import ItemStatus


def _held(make_record, days, now=date(2024, 6, 30), **kwargs):
    return make_record(status=ItemStatus.IN_STOCK, acquired_at=now - timedelta(days=days), **kwargs)


# ---------- inventory breakdown ----------

def test_inventory_breakdown_folds_tail_into_other(make_record):
    frame = records_frame([
        make_record(category="Electronics", status=ItemStatus.IN_STOCK, cost=900),
        make_record(category="Electronics", status=ItemStatus.LISTED, cost=200, refurb_cost=100),
        make_record(category="Home", status=ItemStatus.RESERVED, cost=500),
        make_record(category="Toys", status=ItemStatus.IN_STOCK, cost=100),
        make_record(category="Books", status=ItemStatus.IN_STOCK, cost=50),
        make_record(category="Apparel", status=ItemStatus.REPAIR, cost=5_000),
        make_record(category="Apparel", sold_at=date(2024, 6, 3), cost=7_000),
    ])
    breakdown = inventory_breakdown(frame, limit=2)

    assert [row.category for row in breakdown.rows] == ["Electronics", "Home", "Other"]
    electronics = breakdown.rows[0]
    assert electronics.total_count == 2
    assert electronics.total_cost == 1_200
    assert electronics.statuses["LISTED"].total_cost == 300
    assert electronics.statuses["RESERVED"].count == 0

    other = breakdown.rows[2]
    assert other.total_count == 2
    assert other.total_cost == 150
    assert other.statuses["IN_STOCK"].count == 2

    assert breakdown.grand_totals.total_count == 5
    assert breakdown.grand_totals.total_cost == 1_850
    assert breakdown.grand_totals.statuses["IN_STOCK"].total_cost == 1_050


def test_inventory_breakdown_default_limit_has_no_other_row(make_record):
    frame = records_frame([make_record(category=f"C{i}", cost=100 + i) for i in range(10)])
    breakdown = inventory_breakdown(frame)
    assert len(breakdown.rows) == 10
    assert breakdown.rows[0].category == "C9"
    assert "Other" not in [row.category for row in breakdown.rows]


def test_inventory_breakdown_empty():
    breakdown = inventory_breakdown(records_frame([]))
    assert breakdown.rows == []
    assert breakdown.grand_totals.total_cost == 0


# ---------- threshold aging ----------

def test_aging_buckets_use_inclusive_cutoffs(make_record, now):
    frame = records_frame([
        _held(make_record, 0, cost=10),
        _held(make_record, 30, cost=20),
        _held(make_record, 31, cost=40),
        _held(make_record, 180, cost=80),
        _held(make_record, 181, cost=160),
        _held(make_record, -5, cost=1),
        make_record(status=ItemStatus.REPAIR, acquired_at=date(2020, 1, 1)),
    ])
    result = aging_buckets(frame, now)

    assert result.thresholds == (30, 90, 180)
    assert [b.label for b in result.buckets] == ["0-30", "31-90", "91-180", "181+"]
    assert [b.count for b in result.buckets] == [3, 1, 1, 1]
    assert [b.total_value for b in result.buckets] == [31, 40, 80, 160]
    assert result.buckets[3].max_days is None


def test_aging_buckets_follow_configured_thresholds(make_record, now):
    set_config_for_test(_env_file=None, aging_thresholds=(60, 10, 10))
    result = aging_buckets(records_frame([_held(make_record, 11)]), now)
    assert result.thresholds == (10, 11, 60)
    assert [b.label for b in result.buckets] == ["0-10", "11-11", "12-60", "61+"]
    assert result.buckets[1].count == 1


# ---------- watchlist ----------

def test_aging_watchlist(make_record, now):
    frame = records_frame([
        _held(make_record, 120, item_id="w120"),
        _held(make_record, 200, item_id="c200"),
        _held(make_record, 90, item_id="at90"),
        _held(make_record, 181, item_id="c181"),
        _held(make_record, 10, item_id="fresh"),
    ])
    watch = aging_watchlist(frame, now)

    assert watch.warning_threshold == 90
    assert watch.critical_threshold == 180
    assert [item.item_id for item in watch.warning] == ["c200", "c181", "w120"]
    assert [item.item_id for item in watch.critical] == ["c200", "c181"]
    assert watch.critical[0].days_in_stock == 200

    limited = aging_watchlist(frame, now, limit=1)
    assert [item.item_id for item in limited.warning] == ["c200"]


# ---------- monthly P&L ----------

def test_monthly_pnl_covers_last_months(make_record, now):
    frame = records_frame([
        make_record(sold_at=date(2024, 3, 31), price=999, cost=0),
        make_record(sold_at=date(2024, 4, 1), price=100, cost=40),
        make_record(sold_at=date(2024, 6, 30), price=50, cost=70),
    ])
    pnl = monthly_pnl(frame, now, months=3)

    assert pnl.months == 3
    assert [p.month for p in pnl.points] == ["2024-04", "2024-05", "2024-06"]
    assert [p.profit for p in pnl.points] == [60, 0, -20]

    assert [p.month for p in monthly_pnl(frame, now, months=0).points] == ["2024-06"]


def test_monthly_pnl_defaults_and_timezone(make_record):
    frame = records_frame([make_record(sold_at=date(2024, 1, 15), price=300, cost=100)])
    pnl = monthly_pnl(frame, datetime(2024, 6, 30, 23, 0, tzinfo=timezone.utc))
    assert len(pnl.points) == 12
    assert pnl.points[0].month == "2023-07"
    assert sum(p.profit for p in pnl.points) == 200
