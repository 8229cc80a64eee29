"""Application configuration loaded from environment variables."""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central pipeline settings, read once at startup and never mutated."""

    api_key: str = Field(alias="API_KEY", min_length=1)
    api_url: str = Field(alias="API_URL", min_length=1)
    verbose: bool = Field(default=False, alias="VERBOSE")
    retry_delay_ms: int = Field(default=10000, ge=0, alias="RETRY_DELAY")
    retry_max: int = Field(default=30, ge=0, alias="RETRY_MAX")
    paging_delay_ms: int = Field(default=1000, ge=0, alias="PAGING_DELAY")
    paging_limit: int = Field(default=20, ge=1, alias="PAGING_LIMIT")
    request_timeout_s: float = Field(default=30.0, gt=0, alias="REQUEST_TIMEOUT_S")
    dry_run: bool = Field(default=False, alias="DRY_RUN")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")

    @property
    def retry_delay_s(self) -> float:
        return self.retry_delay_ms / 1000

    @property
    def paging_delay_s(self) -> float:
        return self.paging_delay_ms / 1000


@lru_cache
def get_settings() -> Settings:
    return Settings()
