"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from watchcompass import __version__
from watchcompass.api import api_router
from watchcompass.api.dependencies import get_cache_store, reset_dependencies
from watchcompass.config import get_settings
from watchcompass.services.catalog import CatalogConfigurationError, UpstreamError
from watchcompass.utils.cache import RedisCacheStore
from watchcompass.utils.http_client import close_all_clients
from watchcompass.utils.logging import get_logger, setup_logging
from watchcompass.utils.metrics import MetricsMiddleware, metrics

settings = get_settings()
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    if not settings.tmdb.has_api_key:
        logger.warning("TMDB_API_KEY is not set - catalog requests will fail with 503")

    store = get_cache_store()
    if isinstance(store, RedisCacheStore):
        if await store.connect():
            logger.info("Redis cache connected")
        else:
            logger.warning("Redis cache unavailable - running without caching")
    else:
        logger.info("Using in-memory catalog cache")

    yield

    # Close cache store
    await store.close()
    logger.info("Cache store closed")

    # Close persistent HTTP clients
    await close_all_clients()
    logger.info("HTTP clients closed")

    reset_dependencies()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

# Middleware (order matters - first added = last executed)
app.add_middleware(MetricsMiddleware)  # Collect HTTP metrics
app.add_middleware(GZipMiddleware, minimum_size=500)  # Compress responses > 500 bytes

if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:8080", "http://127.0.0.1:8080"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

# Routers
app.include_router(api_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests as 400."""
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request.", "errors": jsonable_errors(exc)},
    )


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    """Map catalog upstream failures to 502."""
    logger.error(f"Upstream failure on {request.url.path}: {exc} (status {exc.status_code})")
    return JSONResponse(
        status_code=502,
        content={"detail": "The movie catalog is unavailable. Please try again later."},
    )


@app.exception_handler(CatalogConfigurationError)
async def configuration_error_handler(request: Request, exc: CatalogConfigurationError) -> JSONResponse:
    """Map missing catalog configuration to 503."""
    logger.error(f"Catalog misconfigured: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "The movie catalog is not configured."},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    """Reduce validation errors to location and message."""
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]


# Store app start time for uptime tracking
_app_start_time = datetime.now(UTC)


@app.get("/health", include_in_schema=True, tags=["monitoring"])
async def health_check() -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Returns:
        JSONResponse with status, uptime, and service health checks.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime_seconds": (datetime.now(UTC) - _app_start_time).total_seconds(),
        "version": __version__,
        "checks": {},
    }

    # Check catalog configuration
    if get_settings().tmdb.has_api_key:
        health_status["checks"]["catalog"] = {"status": "healthy"}
    else:
        health_status["checks"]["catalog"] = {"status": "unconfigured"}
        health_status["status"] = "degraded"

    # Check cache store
    try:
        await get_cache_store().ping()
        health_status["checks"]["cache"] = {"status": "healthy"}
    except Exception:
        health_status["checks"]["cache"] = {"status": "unhealthy"}
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)


@app.get("/metrics", include_in_schema=True, tags=["monitoring"])
async def prometheus_metrics() -> Response:
    """Prometheus metrics endpoint.

    Returns:
        Prometheus-formatted metrics text.
    """
    return Response(
        content=metrics.format_prometheus(),
        media_type="text/plain; charset=utf-8",
    )
