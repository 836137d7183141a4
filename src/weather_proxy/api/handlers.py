"""Translation of pipeline errors into JSON responses."""

import traceback

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from weather_proxy.api.schemas import ErrorResponse
from weather_proxy.config import Settings
from weather_proxy.errors import WeatherError

logger = structlog.get_logger()


def _error_body(exc: Exception, message: str, settings: Settings) -> dict[str, object]:
    stack = None if settings.is_production else "".join(traceback.format_exception(exc))
    return ErrorResponse(message=message, stack=stack).model_dump(exclude_none=True)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Install the handlers rendering ``{"success": false, "message": ...}``."""

    @app.exception_handler(WeatherError)
    async def weather_error_handler(request: Request, exc: WeatherError) -> JSONResponse:
        logger.error(
            "Weather request failed",
            kind=exc.kind.value,
            status_code=exc.status_code,
            error=exc.message,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc, exc.message, settings),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(exc, str(exc) or "Internal Server Error", settings),
        )
