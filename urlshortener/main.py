"""URL Shortener Service - Main FastAPI Application.

Shortens URLs into 20-character ids and redirects them:
- List associations
- Create short ids
- Redirect to original URLs
- Update URLs
- Delete associations
- Prometheus request latency metrics
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .core.config import settings
from .core.exceptions import (
    AssociationNotFoundError,
    InvalidRequestBodyError,
    InvalidURLError,
    ShortenerError,
    StoreUnavailableError,
)
from .core.middleware import RequestLoggingMiddleware
from .dependencies import create_store
from .api.routes import metrics_router, urls_router

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    InvalidURLError: 400,
    InvalidRequestBodyError: 400,
    AssociationNotFoundError: 400,
    StoreUnavailableError: 500,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    # Startup; an unreachable store aborts it
    logger.info(f"Starting {settings.app_title} with {settings.store_backend} store...")
    store = create_store(settings)
    app.state.store = store
    logger.info("Store initialized")
    yield
    # Shutdown
    logger.info("Shutting down URL Shortener Service...")
    store.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_title,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ShortenerError)
async def shortener_exception_handler(request: Request, exc: ShortenerError):
    """Render service errors as plain text."""
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc!r}")
    return PlainTextResponse(str(exc), status_code=status_code)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler."""
    logger.error(f"Unhandled Exception: {exc}")
    return PlainTextResponse("Internal server error", status_code=500)


# Include routers
app.include_router(metrics_router)
app.include_router(urls_router)


def run() -> None:
    """Serve the application until SIGINT or SIGTERM.

    On a signal, uvicorn stops accepting connections and gives in-flight
    requests ``shutdown_timeout`` seconds before the lifespan closes the store.
    """
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=settings.keep_alive_timeout,
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    run()
