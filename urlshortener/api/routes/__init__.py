"""Route modules for URL Shortener Service."""

from .metrics import router as metrics_router
from .urls import router as urls_router

__all__ = ["metrics_router", "urls_router"]
