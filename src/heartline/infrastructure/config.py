"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gateway → upstream
    azure_openai_endpoint: str | None = None
    azure_openai_key: SecretStr | None = None
    azure_openai_api_version: str = "2024-08-01-preview"
    default_model: str = "gpt-4o-mini"
    temperature: float = 0.7

    # Client facade
    llm_transport: Literal["http", "bridge"] = "http"
    gateway_url: str = "http://localhost:8000"
    gateway_timeout_seconds: float | None = None
    profile_store_path: str | None = None

    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_gateway_configured(self) -> bool:
        """True when both the upstream endpoint and credential are present."""
        key = self.azure_openai_key.get_secret_value() if self.azure_openai_key else ""
        return bool(self.azure_openai_endpoint and key)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
