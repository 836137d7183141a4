"""OpenWeatherMap API client."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

import httpx
import structlog
from prometheus_client import Counter, Histogram

from weather_proxy.api.schemas import Coordinates, WeatherSnapshot
from weather_proxy.config import Settings
from weather_proxy.errors import NotFoundError, UpstreamError

logger = structlog.get_logger()

# Metrics
upstream_requests = Counter(
    "upstream_requests_total",
    "Total upstream API requests",
    ["endpoint", "status"],
)
upstream_duration = Histogram(
    "upstream_request_duration_seconds",
    "Upstream request duration in seconds",
    ["endpoint"],
    buckets=[0.05, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0],
)


@dataclass(frozen=True)
class ForecastSample:
    """A single 3-hour forecast point from upstream."""

    timestamp: datetime
    temperature: float
    description: str


class OpenWeatherClient:
    """HTTP client for the OpenWeatherMap weather, forecast and geocoding APIs.

    Every method makes exactly one upstream call and never retries.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize client with settings."""
        self._api_key = settings.openweathermap_api_key
        self._weather_url = settings.weather_url
        self._forecast_url = settings.forecast_url
        self._geocoding_url = settings.geocoding_url
        self._timeout = settings.upstream_timeout_seconds

    async def resolve(self, city: str) -> Coordinates:
        """Resolve a free-text city name to coordinates.

        Raises:
            NotFoundError: If upstream has no match for the city
            UpstreamError: On transport failure or a non-2xx response
        """
        params: dict[str, str | int] = {"q": city, "limit": 1, "appid": self._api_key}
        data = await self._get("geocoding", self._geocoding_url, params)

        if not isinstance(data, list):
            raise UpstreamError("Unexpected geocoding response format")
        if not data:
            raise NotFoundError(city)

        try:
            return Coordinates(latitude=data[0]["lat"], longitude=data[0]["lon"])
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f"Missing coordinates in geocoding response: {e}") from e

    async def get_current_weather(self, city: str) -> WeatherSnapshot:
        """Fetch current conditions for a city name in metric units.

        Raises:
            UpstreamError: On transport failure, a non-2xx response or a
                response missing required fields
        """
        params: dict[str, str] = {"q": city, "appid": self._api_key, "units": "metric"}
        data = await self._get("current", self._weather_url, params)
        return self._parse_current(data)

    async def get_forecast(self, coords: Coordinates) -> list[ForecastSample]:
        """Fetch the 5-day / 3-hour forecast series for coordinates.

        Samples are returned in upstream (chronological) order.
        """
        params: dict[str, str | float] = {
            "lat": coords.latitude,
            "lon": coords.longitude,
            "appid": self._api_key,
            "units": "metric",
        }
        data = await self._get("forecast", self._forecast_url, params)
        return self._parse_forecast(data)

    async def _get(self, endpoint: str, url: str, params: dict[str, Any]) -> Any:
        with upstream_duration.labels(endpoint=endpoint).time():
            try:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params)
                response.raise_for_status()

            except httpx.HTTPStatusError as e:
                upstream_requests.labels(endpoint=endpoint, status="error").inc()
                status_code = e.response.status_code
                logger.warning(
                    "Upstream returned error status",
                    endpoint=endpoint,
                    status_code=status_code,
                    url=url,
                )
                # httpx's message embeds the full URL, API key included
                raise UpstreamError(
                    f"Request failed with status code {status_code}",
                    status_code if status_code >= 400 else 500,
                ) from None

            except httpx.TimeoutException as e:
                upstream_requests.labels(endpoint=endpoint, status="timeout").inc()
                logger.warning("Upstream request timed out", endpoint=endpoint, timeout=self._timeout)
                raise UpstreamError(str(e) or type(e).__name__) from e

            except httpx.HTTPError as e:
                upstream_requests.labels(endpoint=endpoint, status="error").inc()
                logger.warning("Upstream request failed", endpoint=endpoint, error=str(e))
                raise UpstreamError(str(e) or type(e).__name__) from e

        upstream_requests.labels(endpoint=endpoint, status="success").inc()
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"Invalid JSON from upstream {endpoint} endpoint") from e

    def _parse_current(self, data: Any) -> WeatherSnapshot:
        """Parse a current weather response.

        Raises:
            UpstreamError: If required fields are missing from response
        """
        try:
            main = data["main"]
            wind = data.get("wind") or {}
            return WeatherSnapshot(
                city=data["name"],
                temperature=main["temp"],
                description=data["weather"][0]["description"],
                humidity=main.get("humidity"),
                windSpeed=wind.get("speed"),
            )
        except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
            raise UpstreamError(f"Missing required weather data in response: {e}") from e

    def _parse_forecast(self, data: Any) -> list[ForecastSample]:
        """Parse a forecast response into samples.

        Raises:
            UpstreamError: If the sample list or a sample field is missing
        """
        try:
            return [
                ForecastSample(
                    timestamp=datetime.fromisoformat(item["dt_txt"]),
                    temperature=float(item["main"]["temp"]),
                    description=item["weather"][0]["description"],
                )
                for item in data["list"]
            ]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise UpstreamError(f"Missing required forecast data in response: {e}") from e
