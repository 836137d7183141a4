"""Weather service orchestrating cache and upstream client."""

from typing import Literal

import structlog
from pydantic import TypeAdapter, ValidationError

from weather_proxy.api.schemas import (
    CurrentWeatherResponse,
    ForecastDay,
    ForecastResponse,
    WeatherSnapshot,
)
from weather_proxy.services.cache import CacheService
from weather_proxy.services.forecast import aggregate
from weather_proxy.services.openweather import OpenWeatherClient

logger = structlog.get_logger()

_forecast_adapter = TypeAdapter(list[ForecastDay])


def cache_key(kind: Literal["current", "forecast"], city: str) -> str:
    """Build the cache key for a city; only case is normalized."""
    return f"weather:{kind}:{city.lower()}"


class WeatherService:
    """Service for fetching weather data with caching."""

    def __init__(self, cache: CacheService, client: OpenWeatherClient) -> None:
        """Initialize service with cache and client."""
        self._cache = cache
        self._client = client

    async def get_current(self, city: str) -> CurrentWeatherResponse:
        """Get current weather for a city.

        Checks cache first, fetches from upstream on cache miss. Upstream
        errors propagate and leave the cache untouched.
        """
        key = cache_key("current", city)

        cached = await self._cache.get(key)
        if cached is not None:
            try:
                snapshot = WeatherSnapshot.model_validate(cached)
            except ValidationError as e:
                logger.warning("Discarding invalid cache entry", key=key, error=str(e))
            else:
                logger.info("Cache hit for current weather", city=city, cache_hit=True)
                return CurrentWeatherResponse(source="cache", data=snapshot)

        logger.info("Cache miss, fetching current weather", city=city, cache_hit=False)
        snapshot = await self._client.get_current_weather(city)

        await self._cache.set(key, snapshot.model_dump(mode="json"))
        return CurrentWeatherResponse(source="API", data=snapshot)

    async def get_forecast(self, city: str) -> ForecastResponse:
        """Get the aggregated daily forecast for a city.

        On cache miss the city is geocoded, the 3-hour series fetched and
        reduced to one record per day before caching.
        """
        key = cache_key("forecast", city)

        cached = await self._cache.get(key)
        if cached is not None:
            try:
                days = _forecast_adapter.validate_python(cached)
            except ValidationError as e:
                logger.warning("Discarding invalid cache entry", key=key, error=str(e))
            else:
                logger.info("Cache hit for forecast", city=city, cache_hit=True)
                return ForecastResponse(source="cache", data=days)

        logger.info("Cache miss, fetching forecast", city=city, cache_hit=False)
        coords = await self._client.resolve(city)
        samples = await self._client.get_forecast(coords)
        days = aggregate(samples)

        await self._cache.set(key, _forecast_adapter.dump_python(days, mode="json"))
        return ForecastResponse(source="API", data=days)
