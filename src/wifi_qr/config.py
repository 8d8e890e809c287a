"""Runtime settings read from ``WIFI_QR_*`` environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WIFI_QR_", env_file=".env", extra="ignore")

    render_workers: int = 4
    max_bulk_ids: int = 50
    archive_name: str = "wifi-qrcodes.zip"

    log_level: str = "INFO"
    log_format: str = "text"

    @field_validator("render_workers", "max_bulk_ids")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in {"text", "json"}:
            raise ValueError("log_format must be 'text' or 'json'")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
