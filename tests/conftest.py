"""Test fixtures."""

from collections.abc import Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from weather_proxy.config import Settings
from weather_proxy.main import create_app
from weather_proxy.services.cache import CacheService, MemoryStore
from weather_proxy.services.openweather import OpenWeatherClient


class FailingStore:
    """Store whose every operation fails like an unreachable redis server."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def get(self, key: str) -> Any:
        self.calls.append("get")
        raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def set(self, key: str, value: str, ex: int | None = None) -> Any:
        self.calls.append("set")
        raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def delete(self, *keys: str) -> Any:
        self.calls.append("delete")
        raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")

    async def ping(self) -> Any:
        self.calls.append("ping")
        raise RedisConnectionError("Error 111 connecting to localhost:6379. Connection refused.")


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        openweathermap_api_key="test-key",
        upstream_timeout_seconds=1.0,
        cache_backend="memory",
        cache_ttl_seconds=3600,
        cache_max_size=1000,
        environment="test",
        log_level="DEBUG",
        log_format="text",
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    """Create an empty in-memory store."""
    return MemoryStore(maxsize=100)


@pytest.fixture
def failing_store() -> FailingStore:
    """Create a store that is always down."""
    return FailingStore()


@pytest.fixture
def cache_service(memory_store: MemoryStore) -> CacheService:
    """Create test cache service."""
    return CacheService(memory_store, ttl_seconds=3600)


@pytest.fixture
def openweather_client(settings: Settings) -> OpenWeatherClient:
    """Create test OpenWeatherMap client."""
    return OpenWeatherClient(settings)


@pytest.fixture
def app(settings: Settings, memory_store: MemoryStore) -> FastAPI:
    """Create test application."""
    return create_app(settings, store=memory_store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def current_payload() -> dict[str, Any]:
    """Upstream current weather response for London."""
    return {
        "name": "London",
        "main": {"temp": 18.5, "humidity": 72},
        "weather": [{"description": "clear sky"}],
        "wind": {"speed": 4.1},
    }


@pytest.fixture
def geocoding_payload() -> list[dict[str, Any]]:
    """Upstream geocoding response for London."""
    return [{"name": "London", "lat": 51.5074, "lon": -0.1278, "country": "GB"}]


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    """Upstream forecast response spanning two days."""
    return {
        "cnt": 3,
        "list": [
            {
                "dt_txt": "2024-05-01 18:00:00",
                "main": {"temp": 10},
                "weather": [{"description": "clear sky"}],
            },
            {
                "dt_txt": "2024-05-01 21:00:00",
                "main": {"temp": 20},
                "weather": [{"description": "clear sky"}],
            },
            {
                "dt_txt": "2024-05-02 00:00:00",
                "main": {"temp": 15},
                "weather": [{"description": "light rain"}],
            },
        ],
    }
