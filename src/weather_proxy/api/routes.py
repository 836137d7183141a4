"""API route definitions."""

from fastapi import APIRouter

from weather_proxy.api.dependencies import CacheDep, WeatherServiceDep
from weather_proxy.api.schemas import (
    CurrentWeatherResponse,
    ErrorResponse,
    ForecastResponse,
    HealthResponse,
    MessageResponse,
    ReadinessResponse,
)

# Root router for the status message
root_router = APIRouter(tags=["root"])

# API router for weather endpoints
api_router = APIRouter(prefix="/api/weather", tags=["weather"])

# Health router for health checks
health_router = APIRouter(prefix="/health", tags=["health"])

ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    404: {"model": ErrorResponse, "description": "City not found"},
    500: {"model": ErrorResponse, "description": "Upstream or unexpected failure"},
}


@root_router.get("/", response_model=MessageResponse)
async def index() -> MessageResponse:
    """Report that the API is up."""
    return MessageResponse(message="Weather Dashboard API is running!")


@api_router.get(
    "/current/{city}",
    response_model=CurrentWeatherResponse,
    responses=ERROR_RESPONSES,
)
async def get_current_weather(
    city: str,
    weather_service: WeatherServiceDep,
) -> CurrentWeatherResponse:
    """Get current weather for a city.

    Results are cached for one hour per lowercased city name.
    """
    return await weather_service.get_current(city)


@api_router.get(
    "/forecast/{city}",
    response_model=ForecastResponse,
    responses=ERROR_RESPONSES,
)
async def get_forecast(
    city: str,
    weather_service: WeatherServiceDep,
) -> ForecastResponse:
    """Get the 5-day forecast for a city, one record per day.

    Results are cached for one hour per lowercased city name.
    """
    return await weather_service.get_forecast(city)


@health_router.get("/live", response_model=HealthResponse)
async def liveness() -> HealthResponse:
    """Liveness probe - checks if the service is running."""
    return HealthResponse(status="ok")


@health_router.get("/ready", response_model=ReadinessResponse)
async def readiness(cache: CacheDep) -> ReadinessResponse:
    """Readiness probe.

    An unavailable cache only degrades the service, since every request can
    still be served from upstream.
    """
    cache_status = "ok" if await cache.is_healthy() else "unavailable"
    overall_status = "ok" if cache_status == "ok" else "degraded"

    return ReadinessResponse(
        status=overall_status,
        checks={"cache": cache_status},
    )
