from datetime import date, datetime
from itertools import count

import pytest

from resale_reports.config import set_config_for_test
from resale_reports.data.models import Channel, InventoryRecord, ItemStatus

_ids = count(1)


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from the built-in defaults, whatever the environment says."""
    for var in ["DATA_DIR", "RECORDS_FILE", "DEFAULT_RANGE_DAYS", "PARALLEL_AGGREGATIONS", "LOG_LEVEL",
                "AGING_THRESHOLDS", "WATCHLIST_LIMIT", "MONTHLY_PNL_MONTHS"]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test(_env_file=None, log_level="WARNING")
    yield
    monkeypatch.undo()
    set_config_for_test(_env_file=None, log_level="WARNING")


@pytest.fixture
def now():
    return datetime(2024, 6, 30, 15, 30)


@pytest.fixture
def make_record():
    """Factory for records; sold_at implies SOLD unless a status is given."""
    def _make(
        product_id="PRD-001",
        product_name=None,
        category="Electronics",
        channel=Channel.ONLINE_STORE,
        status=None,
        acquired_at=date(2024, 6, 1),
        listed_at=None,
        sold_at=None,
        price=1_000,
        cost=600,
        refurb_cost=0,
        item_id=None,
    ):
        if status is None:
            status = ItemStatus.SOLD if sold_at is not None else ItemStatus.IN_STOCK
        return InventoryRecord(
            item_id=item_id or f"ITM-{next(_ids):05d}",
            product_id=product_id,
            product_name=product_name or f"Product {product_id}",
            category=category,
            channel=channel,
            status=status,
            acquired_at=acquired_at,
            listed_at=listed_at,
            sold_at=sold_at,
            price=price,
            cost=cost,
            refurb_cost=refurb_cost,
        )
    return _make
