"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Daily key
    timezone: str = Field(
        default="America/Denver",
        description="IANA timezone whose civil day defines the daily game",
    )
    trust_source: Literal["local", "remote"] = Field(
        default="local",
        description="Where the daily key comes from: local clock or remote Date header",
    )
    time_check_url: str = Field(
        default="https://www.google.com",
        description="URL whose Date response header is trusted for the daily key",
    )
    time_check_timeout: float = Field(
        default=2.0, description="Timeout in seconds for the trusted time check"
    )

    # Sharing
    share_site: str = Field(
        default="blindglobe.terpscoops.com", description="Site shown in share text"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Database
    database_url: str = Field(
        default="sqlite:///./blindglobe.db",
        description="Database connection URL",
    )

    @property
    def uses_remote_time(self) -> bool:
        """Check if the daily key should come from the trusted time check."""
        return self.trust_source == "remote"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
