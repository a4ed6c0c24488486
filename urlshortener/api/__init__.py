"""API package for URL Shortener Service."""

from .routes import metrics_router, urls_router

__all__ = ["metrics_router", "urls_router"]
