"""Services package for URL Shortener Service."""

from .association_service import AssociationService

__all__ = ["AssociationService"]
