from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pandas as pd
from pydantic import ValidationError

from ...config import get_config
from ...logging import get_logger
from ..interface import RecordSource
from ..models import DateBounds, InventoryRecord, RecordFilters, StringList

DATE_COLUMNS = ["acquired_at", "listed_at", "sold_at"]
REQUIRED_COLUMNS = [
    "item_id", "product_id", "product_name", "category", "channel", "status",
    "acquired_at", "price", "cost",
]


class CsvRecordSource(RecordSource):
    """
    CSV-backed record source.
    - Loads and validates the records CSV from `data_dir` once at construction.
    - Every method call performs a fresh filter pass over the loaded frame
      (so each report request triggers new work, mirroring a DB query).
    """

    def __init__(self, data_dir: str | Path = None, records_file: Optional[str] = None) -> None:
        config = get_config()
        if data_dir is None:
            data_dir = config.data_dir
        if records_file is None:
            records_file = config.records_file

        self.logger = get_logger(__name__)
        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

        self.records_path = self.data_dir / records_file
        self._frame = self._load_frame(self.records_path)
        self._records = self._build_records(self._frame, self.records_path)
        self.logger.info(f"Loaded {len(self._records)} inventory records from {self.records_path}")

    # ---------- loading helpers ----------

    @staticmethod
    def _load_frame(path: Path) -> pd.DataFrame:
        if not path.parent.exists():
            raise FileNotFoundError(
                f"Data directory not found: {path.parent}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m resale_reports.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )
        if not path.exists():
            raise FileNotFoundError(
                f"Records file missing: {path}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m resale_reports.seed_data\n"
                f"  2. Set RECORDS_FILE to the name of your records CSV"
            )

        try:
            df = pd.read_csv(path, dtype={"item_id": str, "product_id": str})
        except Exception as e:
            raise RuntimeError(
                f"Error reading records CSV {path}: {e}\n"
                f"Please check that the file is valid and readable."
            ) from e

        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise RuntimeError(
                f"Records CSV {path} is missing columns: {', '.join(missing)}\n"
                f"  Expected at least: {', '.join(REQUIRED_COLUMNS)}"
            )

        for col in DATE_COLUMNS:
            if col not in df.columns:
                df[col] = None
        if "refurb_cost" not in df.columns:
            df["refurb_cost"] = 0
        df["refurb_cost"] = df["refurb_cost"].fillna(0)
        return df

    @staticmethod
    def _build_records(df: pd.DataFrame, path: Path) -> List[InventoryRecord]:
        # NaN -> None so optional dates validate as missing
        rows = df.astype(object).where(df.notna(), None).to_dict(orient="records")
        try:
            return [InventoryRecord.model_validate(row) for row in rows]
        except ValidationError as e:
            raise RuntimeError(f"Invalid inventory record in {path}:\n{e}") from e

    # ---------- interface implementation ----------

    def get_date_bounds(self) -> Optional[DateBounds]:
        if not self._records:
            return None
        first = min(record.acquired_at for record in self._records)
        last = max(
            max(record.acquired_at, record.sold_at or record.acquired_at)
            for record in self._records
        )
        return DateBounds(start_date=first, end_date=last)

    def list_channels(self) -> StringList:
        channels = {record.channel.value for record in self._records}
        return StringList(values=sorted(channels))

    def list_categories(self) -> StringList:
        categories = {record.category for record in self._records}
        return StringList(values=sorted(categories))

    def get_records(self, filters: Optional[RecordFilters] = None) -> List[InventoryRecord]:
        if filters is None:
            return list(self._records)

        records = self._records
        if filters.acquired_from:
            start = filters.acquired_from.date()
            records = [r for r in records if r.acquired_at >= start]
        if filters.acquired_to:
            end = filters.acquired_to.date()
            records = [r for r in records if r.acquired_at <= end]
        if filters.status:
            statuses = {filters.status} if not isinstance(filters.status, list) else set(filters.status)
            records = [r for r in records if r.status in statuses]
        if filters.channel:
            channels = {filters.channel} if not isinstance(filters.channel, list) else set(filters.channel)
            records = [r for r in records if r.channel in channels]
        if filters.category:
            if isinstance(filters.category, str):
                records = [r for r in records if r.category == filters.category]
            else:
                records = [r for r in records if r.category in filters.category]

        return list(records)
