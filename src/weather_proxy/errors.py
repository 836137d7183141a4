"""Error types raised by the weather pipeline.

Every failure that can reach a client is a ``WeatherError`` carrying its kind
and HTTP status, so the response layer maps errors in one place.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminator for weather pipeline failures."""

    NOT_FOUND = "not_found"
    UPSTREAM = "upstream"
    CACHE = "cache"


class WeatherError(Exception):
    """Base exception for weather pipeline errors."""

    kind: ErrorKind = ErrorKind.UPSTREAM

    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotFoundError(WeatherError):
    """Raised when the geocoder has no match for a city."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, city: str) -> None:
        super().__init__(f'City "{city}" not found.', 404)
        self.city = city


class UpstreamError(WeatherError):
    """Raised on transport failures, timeouts and non-2xx upstream responses."""

    kind = ErrorKind.UPSTREAM


class CacheError(WeatherError):
    """Raised inside the cache layer; never propagated past it."""

    kind = ErrorKind.CACHE
