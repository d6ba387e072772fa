"""Environment-based configuration using pydantic-settings.

Provides type-safe, validated defaults for retry sessions and logging.
Explicit arguments passed to the retry functions always win over settings.

Example:
    >>> from retrykit.config import get_settings
    >>> settings = get_settings()
    >>> settings.retry.growth_factor
    1.2
    >>> settings.logging.level
    'INFO'

    # Or with environment variables:
    # RETRYKIT_RETRY_MAX_RETRIES=5
    # RETRYKIT_RETRY_INITIAL_DELAY=0.5
    # RETRYKIT_LOG_FORMAT=json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeFloat, PositiveFloat, ValidationInfo, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class RetrySettings(BaseSettings):
    """Default retry session configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_RETRY_",
        extra="ignore",
    )

    max_retries: Annotated[int, Field(ge=0, le=100)] = 3
    initial_delay: NonNegativeFloat = Field(default=1.0, description="First sleep in seconds")
    growth_factor: PositiveFloat = Field(default=1.2, description="Multiplier applied after each sleep")
    jitter: NonNegativeFloat = Field(default=0.8, description="Exclusive upper bound of added jitter in seconds")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_LOG_",
        extra="ignore",
    )

    level: LogLevel = "INFO"
    format: Literal["json", "text"] = "text"
    include_timestamps: bool = True

    @field_validator("level", "format", mode="before")
    @classmethod
    def _normalize_case(cls, v: str, info: ValidationInfo) -> str:
        """Accept any casing from the environment."""
        if not isinstance(v, str):
            return v
        return v.upper() if info.field_name == "level" else v.lower()


class RetrykitSettings(BaseSettings):
    """Root settings for retrykit.

    Loads configuration from environment variables with RETRYKIT_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        RETRYKIT_DEBUG=true
        RETRYKIT_RETRY_MAX_RETRIES=5
        RETRYKIT_RETRY_JITTER=0
        RETRYKIT_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="RETRYKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested settings (loaded with RETRYKIT_RETRY_, RETRYKIT_LOG_)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> LogLevel:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> RetrykitSettings:
    """Get the global settings instance (cached)."""
    return RetrykitSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
