"""Request logging and latency middleware."""

import time
import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .metrics import METRICS_PATH, observe_request


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request and records its latency."""

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("urlshortener.requests")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        # Unhandled errors become a 500 further out, in ServerErrorMiddleware
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start_time

            # Scrapes of the metrics endpoint are not part of the request latency
            if request.url.path != METRICS_PATH:
                observe_request(duration)

            self.logger.info(
                f"Handle {request.method} {request.url.path} - "
                f"Status: {status_code} - Duration: {duration * 1000:.2f}ms"
            )
