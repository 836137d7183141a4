"""Application configuration management."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Server settings
    app_host: str = Field(default="0.0.0.0", description="Server bind host")
    app_port: int = Field(default=3000, description="Server bind port")
    environment: str = Field(
        default="development",
        description="Deployment environment; error stacks are hidden in production",
    )

    # Upstream API settings
    openweathermap_api_key: str = Field(default="", description="OpenWeatherMap API key")
    weather_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/weather",
        description="Current weather endpoint",
    )
    forecast_url: str = Field(
        default="https://api.openweathermap.org/data/2.5/forecast",
        description="5-day / 3-hour forecast endpoint",
    )
    geocoding_url: str = Field(
        default="https://api.openweathermap.org/geo/1.0/direct",
        description="Direct geocoding endpoint",
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Upstream request timeout in seconds",
        ge=0.1,
        le=30.0,
    )

    # Cache settings
    cache_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Cache store backend",
    )
    redis_url: str = Field(
        default="redis://localhost:6379",
        description="Redis connection URL",
    )
    cache_ttl_seconds: int = Field(
        default=3600,
        description="Cache TTL in seconds",
        ge=1,
        le=86400,
    )
    cache_max_size: int = Field(
        default=10000,
        description="Maximum entries for the in-memory backend",
        ge=1,
        le=1000000,
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log format (json or text)",
    )

    @property
    def is_production(self) -> bool:
        """Whether diagnostic details must be withheld from clients."""
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
