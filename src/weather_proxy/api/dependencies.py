"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from weather_proxy.services.cache import CacheService
from weather_proxy.services.openweather import OpenWeatherClient
from weather_proxy.services.weather import WeatherService


def get_cache_service(request: Request) -> CacheService:
    """Get the application's cache service."""
    cache: CacheService = request.app.state.cache
    return cache


def get_openweather_client(request: Request) -> OpenWeatherClient:
    """Get the application's OpenWeatherMap client."""
    client: OpenWeatherClient = request.app.state.openweather
    return client


def get_weather_service(
    cache: Annotated[CacheService, Depends(get_cache_service)],
    client: Annotated[OpenWeatherClient, Depends(get_openweather_client)],
) -> WeatherService:
    """Get weather service instance."""
    return WeatherService(cache, client)


# Type aliases for dependency injection
CacheDep = Annotated[CacheService, Depends(get_cache_service)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
