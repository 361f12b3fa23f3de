"""Application configuration loaded from environment variables."""

from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "condo-metrics"
    debug: bool = False
    log_level: str = "INFO"
    default_company_id: str = "default"

    # Local-day bucketing (hour of day, calendar date)
    timezone: str = "UTC"

    # Rolling windows, anchored at the request time
    week_days: int = 7
    month_days: int = 30
    trend_days: int = 7
    top_visitors_limit: int = 5

    # Average stay estimation: "placeholder" or "paired"
    stay_strategy: str = "placeholder"
    stay_placeholder_minutes: int = 45
    stay_max_hours: float = 12.0

    # Serve the demo snapshot when the store cannot be read
    demo_on_error: bool = True

    model_config = {"env_prefix": "CONDO_"}

    @field_validator("timezone")
    @classmethod
    def timezone_must_exist(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown timezone: {v}") from exc
        return v

    @field_validator("week_days", "month_days", "trend_days", "top_visitors_limit")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("stay_strategy")
    @classmethod
    def stay_strategy_known(cls, v: str) -> str:
        v = v.lower()
        if v not in ("placeholder", "paired"):
            raise ValueError(f"unknown stay strategy: {v}")
        return v


settings = Settings()
