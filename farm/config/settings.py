# farm/config/settings.py

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "farm-rebalancer"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False
    version: str = "0.1.0"

    # --- Database ---
    database_url: str = "sqlite+aiosqlite:///./farm.db"

    # --- Redis (optional; enables the cross-process rebalance lock) ---
    redis_url: Optional[str] = None

    # --- Rebalancing ---
    default_barn_capacity: int = Field(20, gt=0)
    rebalance_lock_ttl_seconds: int = Field(30, gt=0)
    rebalance_lock_wait_seconds: float = Field(10.0, ge=0)

    # --- Observability ---
    enable_metrics: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()
