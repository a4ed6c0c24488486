"""Models package for URL Shortener Service."""

from .association import URLAssociation, URLRequest

__all__ = ["URLAssociation", "URLRequest"]
