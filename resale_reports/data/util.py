from __future__ import annotations

from typing import Literal

from ..config import get_config
from .backends.csv_backend import CsvRecordSource
from .interface import RecordSource


def get_record_source(kind: Literal["csv"] = "csv") -> RecordSource:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvRecordSource(data_dir=config.data_dir, records_file=config.records_file)
    raise ValueError(f"Unknown record source kind: {kind}")
