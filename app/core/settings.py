from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "lawn-recommendations"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # LLM integration (Anthropic Messages API)
    # The key is optional: without it the service answers with a fixed "not configured" text.
    anthropic_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ANTHROPIC_API_KEY", "CLAUDE_API_KEY", "anthropic_api_key"),
        description="Anthropic API key used for /api/recommendations.",
    )
    anthropic_model: str = Field(
        default="claude-3-sonnet-20240229",
        validation_alias=AliasChoices("ANTHROPIC_MODEL", "anthropic_model"),
        description="Model identifier used for recommendation generation.",
    )
    anthropic_base_url: str = Field(
        default="https://api.anthropic.com/v1",
        validation_alias=AliasChoices("ANTHROPIC_BASE_URL", "anthropic_base_url"),
        description="Base URL for the Anthropic API (override for proxies/emulators).",
    )
    anthropic_version: str = Field(
        default="2023-06-01",
        validation_alias=AliasChoices("ANTHROPIC_VERSION", "anthropic_version"),
        description="Value sent in the `anthropic-version` header.",
    )
    anthropic_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        validation_alias=AliasChoices("ANTHROPIC_TIMEOUT_SECONDS", "anthropic_timeout_seconds"),
        description="Timeout for Anthropic API requests (seconds).",
    )
    anthropic_max_retries: int = Field(
        default=0,
        ge=0,
        le=5,
        validation_alias=AliasChoices("ANTHROPIC_MAX_RETRIES", "anthropic_max_retries"),
        description="Extra attempts after a network failure (0 disables retries).",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
