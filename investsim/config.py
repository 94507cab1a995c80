"""Application settings, overridable through INVESTSIM_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Investment Simulator API"
    debug: bool = False
    log_level: str = "INFO"

    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000"

    # two rates closer than this are treated as the same comparison entry
    rate_tolerance: float = 1e-4
    default_view: str = "monthly"

    model_config = SettingsConfigDict(
        env_prefix="INVESTSIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
