from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "http://www.yr.no/"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="YRNO_",
        case_sensitive=False,
    )

    api_url: AnyHttpUrl = Field(default=DEFAULT_API_URL)
    user_agent: str = Field(
        default="yrno-client/0.1 (contact: you@example.com)",
        min_length=3,
        max_length=256,
    )
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)
    probe_attempts: int = Field(default=7, ge=1, le=20)

    cache_path: str | None = Field(default=None)
    cache_ttl_minutes: int = Field(default=10, ge=0, le=60 * 24)
    cache_prefix: str = Field(default="yrno_", min_length=1, max_length=32)
    language: str = Field(default="english", min_length=1, max_length=32)

    @property
    def base_url(self) -> str:
        url = str(self.api_url)
        return url if url.endswith("/") else url + "/"


def load_settings() -> Settings:
    return Settings()
