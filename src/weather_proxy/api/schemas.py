"""API request and response schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """Geographic coordinates resolved for a city."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")


class WeatherSnapshot(BaseModel):
    """Current weather conditions for a city."""

    model_config = ConfigDict(frozen=True)

    city: str = Field(..., description="Canonical city name reported upstream")
    temperature: float = Field(..., description="Temperature in Celsius")
    description: str = Field(..., description="Weather description")
    humidity: int | None = Field(default=None, ge=0, le=100, description="Humidity in %")
    windSpeed: float | None = Field(default=None, description="Wind speed in m/s")  # noqa: N815


class ForecastDay(BaseModel):
    """One aggregated forecast day."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    temperature: float = Field(..., description="Mean temperature in Celsius")
    description: str = Field(..., description="First description reported for the day")


Source = Literal["cache", "API"]


class CurrentWeatherResponse(BaseModel):
    """Current weather API response."""

    source: Source = Field(..., description="Where the data was served from")
    data: WeatherSnapshot


class ForecastResponse(BaseModel):
    """Forecast API response."""

    source: Source = Field(..., description="Where the data was served from")
    data: list[ForecastDay]


class ErrorResponse(BaseModel):
    """Error response."""

    success: bool = Field(default=False)
    message: str = Field(..., description="Error message")
    stack: str | None = Field(default=None, description="Traceback, outside production only")


class MessageResponse(BaseModel):
    """Plain status message."""

    message: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status")


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: str = Field(..., description="Readiness status")
    checks: dict[str, str] = Field(default_factory=dict, description="Component checks")
