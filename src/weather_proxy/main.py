"""Application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from weather_proxy import __version__
from weather_proxy.api.handlers import register_exception_handlers
from weather_proxy.api.routes import api_router, health_router, root_router
from weather_proxy.config import Settings, get_settings
from weather_proxy.middleware.logging import LoggingMiddleware, configure_logging
from weather_proxy.services.cache import CacheService, CacheStore, create_store
from weather_proxy.services.openweather import OpenWeatherClient


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the cache store connections on shutdown."""
    yield
    await app.state.cache.close()


def create_app(settings: Settings | None = None, store: CacheStore | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones
        store: Cache store to use instead of the configured backend
    """
    if settings is None:
        settings = get_settings()

    # Configure logging
    configure_logging(settings)

    # Create FastAPI app
    app = FastAPI(
        title="Weather Proxy API",
        description="Cached current weather and 5-day forecasts from OpenWeatherMap",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Wire services
    app.state.cache = CacheService(
        store if store is not None else create_store(settings),
        ttl_seconds=settings.cache_ttl_seconds,
    )
    app.state.openweather = OpenWeatherClient(settings)

    # Add middleware and error handlers
    app.add_middleware(LoggingMiddleware)
    register_exception_handlers(app, settings)

    # Include routers
    app.include_router(root_router)
    app.include_router(api_router)
    app.include_router(health_router)

    # Mount Prometheus metrics endpoint
    metrics_app = make_asgi_app()
    app.mount("/metrics", metrics_app)

    return app


def run() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "weather_proxy.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
