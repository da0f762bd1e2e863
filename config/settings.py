from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Asset
    supply_cap: float = 21_000_000.0  # hard cap, BTC
    btc_price_usd: float = 50_000.0  # display only (estimated_usd_value)

    # Validation
    validation_tolerance: float = 0.01  # 1% relative, soft checks only

    # Open top bucket heuristic: modelled as spanning two orders of magnitude
    open_bucket_ceiling_multiplier: float = Field(default=100.0, gt=1.0)
    open_bucket_max_position: float = Field(default=0.99, gt=0.0, le=1.0)

    # Comparison metrics
    accumulation_daily_rates: list[float] = [0.001, 0.01, 0.1]  # BTC per day

    # Reporting
    threshold_percentiles: list[float] = [1.0, 5.0, 10.0, 25.0, 50.0, 75.0, 90.0, 95.0, 99.0, 99.9]
    concentration_levels: list[float] = [0.1, 0.5, 1.0, 5.0, 10.0, 25.0, 50.0]

    # Data
    distribution_path: str = ""  # JSON snapshot; empty = bundled mock dataset

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_file: str = ""  # e.g. "logs/wealth_{time:YYYY-MM-DD}.log"


settings = Settings()
