"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Backend
    api_base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the publishing backend",
    )
    api_token: str | None = Field(
        default=None,
        description="Bearer token for the publishing backend session",
    )
    backend_provider: Literal["http", "stub"] = Field(
        default="http",
        description="Backend implementation (http, stub)",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for regular backend requests",
    )
    media_timeout_seconds: float = Field(
        default=600.0,
        description="Timeout for long-running poster/video generation requests",
    )

    # OAuth return location
    app_base_url: str = Field(
        default="http://localhost:8000",
        description="Public URL of this application (OAuth providers return here)",
    )
    connections_path: str = Field(
        default="/dashboard/connections",
        description="Path the identity provider redirects back to after authorization",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    # API Server
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    api_reload: bool = Field(default=False, description="Enable auto-reload for development")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


# Convenience alias
settings = get_settings()
