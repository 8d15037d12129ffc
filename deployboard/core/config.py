"""Application configuration using pydantic-settings."""

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

    # Application
    app_name: str = "DeployBoard"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # TeamCity
    teamcity_url: str = Field(
        default="",
        description="TeamCity server URL, with or without the /app/rest suffix",
    )
    teamcity_token: str = Field(
        default="",
        description="TeamCity access token",
    )
    teamcity_timeout: float = Field(
        default=30.0,
        gt=0,
        description="TeamCity API request timeout in seconds",
    )
    teamcity_history_count: int = Field(
        default=100,
        ge=1,
        description="Maximum finished builds fetched per build configuration",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
