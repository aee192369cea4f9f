"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FetchPolicy = Literal["cache-first", "network-only", "no-cache"]

DEFAULT_GRAPHQL_ENDPOINT = "https://48p1r2roz4.sse.codesandbox.io"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RATESVIEW_",
        case_sensitive=False,
        extra="ignore",
    )

    # GraphQL endpoint
    graphql_endpoint: str = Field(default=DEFAULT_GRAPHQL_ENDPOINT, min_length=1)
    http_timeout: int = Field(default=30, ge=1, le=120)

    # Query cache
    fetch_policy: FetchPolicy = Field(default="cache-first")
    cache_ttl: int = Field(
        default=0,
        ge=0,
        description="Seconds a cached payload stays valid. 0 keeps it for the process lifetime.",
    )

    # API Configuration
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8000)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO"
    )
    log_format: Literal["json", "text"] = Field(default="text")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
