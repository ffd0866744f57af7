from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App environment
    env: str = Field(default="development", alias="ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    # Database
    database_url: str = Field(default="sqlite:///./dev.db", alias="DATABASE_URL")
    slow_query_threshold_ms: int = Field(default=200, alias="SLOW_QUERY_THRESHOLD_MS")

    # Logging configuration used by string_analyzer.logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    console_log_level: str = Field(default="INFO", alias="CONSOLE_LOG_LEVEL")
    log_color: bool = Field(default=True, alias="LOG_COLOR")

    # Rate limiting; without REDIS_URL the counters live in process memory
    rate_limit_enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    rate_limit: str = Field(default="120/minute", alias="RATE_LIMIT")
    redis_url: Optional[str] = Field(default=None, alias="REDIS_URL")

    # Comma-separated list, "*" for any origin
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
