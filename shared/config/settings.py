"""
Centralized configuration management for the Health Headlines service.
Uses Pydantic Settings for validation and type safety.
"""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FEED_URL = (
    "https://saurav.tech/NewsAPI/top-headlines/category/health/in.json"
)


class AppBaseSettings(BaseSettings):
    """Base settings with shared configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class FeedSettings(AppBaseSettings):
    """Headline feed endpoint configuration."""

    feed_url: str = Field(
        default=DEFAULT_FEED_URL,
        validation_alias="FEED_URL",
    )
    http_timeout: float = Field(
        default=10.0,
        validation_alias="HTTP_TIMEOUT",
    )
    user_agent: str = Field(
        default="HealthHeadlines/1.0",
        validation_alias="FEED_USER_AGENT",
    )
    skip_malformed_records: bool = Field(
        default=False,
        validation_alias="FEED_SKIP_MALFORMED_RECORDS",
    )

    @field_validator("feed_url")
    @classmethod
    def validate_feed_url(cls, v):
        """Validate that the feed URL is an absolute HTTP(S) URL."""
        parsed = urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid feed URL: {v}")
        if parsed.scheme not in ["http", "https"]:
            raise ValueError(f"Feed URL must use HTTP or HTTPS: {v}")
        return v

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v):
        if v <= 0:
            raise ValueError("HTTP timeout must be positive")
        return v


class LoggingSettings(AppBaseSettings):
    """Logging configuration settings."""

    level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
    )
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        validation_alias="LOG_FORMAT",
    )
    include_correlation_id: bool = Field(
        default=True,
        validation_alias="LOG_INCLUDE_CORRELATION_ID",
    )
    json_logs: bool = Field(
        default=False,
        validation_alias="JSON_LOGS",
    )


class Settings(AppBaseSettings):
    """Main settings class that combines all configuration sections."""

    feed: FeedSettings = Field(default_factory=FeedSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    service_name: str = Field(
        default="headlines",
        validation_alias="SERVICE_NAME",
    )
    environment: str = Field(
        default="development",
        validation_alias="ENVIRONMENT",
    )
    version: str = Field(
        default="1.0.0",
        validation_alias="SERVICE_VERSION",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_feed_url() -> str:
    """Get the configured headline feed URL."""
    return get_settings().feed.feed_url
