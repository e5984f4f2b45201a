from typing import Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"

    # Data paths
    data_dir: str = "sample_data"
    records_file: str = "inventory_records.csv"

    # Report window
    default_range_days: int = 90

    # Business rules consumed by the aggregations
    aging_bucket_width_days: int = 10
    aging_bucket_count: int = 12
    minimum_margin_percent: float = 20.0
    top_products_limit: int = 10
    top_categories_limit: int = 8
    price_margin_limit: Optional[int] = None

    # Dashboard aging cutoffs in days: fresh, warning, critical
    aging_thresholds: Tuple[int, int, int] = (30, 90, 180)
    watchlist_limit: int = 10
    inventory_breakdown_limit: int = 10
    monthly_pnl_months: int = 12

    # Alert thresholds
    aging_alert_threshold_days: int = 180
    stale_listing_threshold_days: int = 30
    alert_item_limit: int = 5

    # Execution
    parallel_aggregations: bool = False
    aggregation_workers: int = 4

    # Seed data settings
    default_seed_months: int = 12
    default_seed_value: int = 42

    @field_validator("aging_thresholds")
    @classmethod
    def _normalize_aging_thresholds(cls, value: Tuple[int, int, int]) -> Tuple[int, int, int]:
        """Sort, clamp at 0 and make the cutoffs strictly increasing."""
        cutoffs = sorted(max(0, int(v)) for v in value)
        for i in range(1, len(cutoffs)):
            if cutoffs[i] <= cutoffs[i - 1]:
                cutoffs[i] = cutoffs[i - 1] + 1
        return tuple(cutoffs)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
