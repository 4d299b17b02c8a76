from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include frontend settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Tourism Ops Analytics"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    supabase_url: str = Field(..., alias="SUPABASE_URL")
    supabase_service_role_key: Optional[str] = Field(
        default=None, alias="SUPABASE_SERVICE_ROLE_KEY"
    )
    supabase_anon_key: Optional[str] = Field(default=None, alias="SUPABASE_ANON_KEY")

    analytics_default_window_months: int = Field(default=6, alias="ANALYTICS_DEFAULT_WINDOW_MONTHS")
    analytics_daily_trend_max_days: int = Field(default=60, alias="ANALYTICS_DAILY_TREND_MAX_DAYS")
    analytics_top_places_limit: int = Field(default=5, alias="ANALYTICS_TOP_PLACES_LIMIT")
    analytics_recent_activity_limit: int = Field(default=5, alias="ANALYTICS_RECENT_ACTIVITY_LIMIT")
    analytics_fetch_row_limit: int = Field(default=5000, alias="ANALYTICS_FETCH_ROW_LIMIT")

    currency_code: str = Field(default="MYR", alias="CURRENCY_CODE")
    currency_symbol: str = Field(default="RM", alias="CURRENCY_SYMBOL")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
