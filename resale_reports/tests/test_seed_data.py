from datetime import date

from resale_reports import seed_data
from resale_reports.analytics import build_report, compute_alerts, compute_kpis, records_frame
from resale_reports.data.backends.csv_backend import CsvRecordSource
from resale_reports.data.models import ItemStatus


def test_month_starts_cross_year_boundary():
    assert seed_data.month_starts(date(2024, 2, 10), 3) == [date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1)]


def test_generated_csv_loads_and_reports(tmp_path, now):
    code = seed_data.main(["--output-dir", str(tmp_path), "--as-of", "2024-06-30", "--months", "6", "--seed", "7"])
    assert code == 0

    source = CsvRecordSource(data_dir=tmp_path)
    records = source.get_records()
    sold = [r for r in records if r.status == ItemStatus.SOLD]
    assert len(sold) >= 18
    assert all(r.sold_at <= date(2024, 6, 30) for r in sold)
    assert {r.item_id for r in records} >= {"INV-OLD-1", "INV-OLD-2", "INV-OLD-3"}

    bundle = build_report(records, {"start": "2024-01-01", "end": "2024-06-30"}, now)
    assert [m.month for m in bundle.monthly] == [f"2024-0{i}" for i in range(1, 7)]
    assert all(m.revenue > 0 for m in bundle.monthly)

    frame = records_frame(records)
    assert compute_kpis(frame, now).inventory_value > 0
    assert compute_alerts(frame, now).aging.count >= 2


def test_generation_is_deterministic(tmp_path):
    first, second = tmp_path / "a", tmp_path / "b"
    for out in (first, second):
        seed_data.main(["--output-dir", str(out), "--as-of", "2024-06-30", "--seed", "3"])
    assert (first / "inventory_records.csv").read_text() == (second / "inventory_records.csv").read_text()


def test_no_overwrite(tmp_path):
    args = ["--output-dir", str(tmp_path), "--as-of", "2024-06-30"]
    assert seed_data.main(args) == 0
    assert seed_data.main(args + ["--no-overwrite"]) == 2
