"""Core package - configuration, errors and association stores."""

from .config import settings, get_settings, Settings
from .exceptions import (
    ShortenerError,
    InvalidURLError,
    InvalidRequestBodyError,
    AssociationNotFoundError,
    StoreUnavailableError,
)
from .store import AssociationStore, MemoryAssociationStore
from .database import SQLiteAssociationStore
from .mongo import MongoAssociationStore

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "ShortenerError",
    "InvalidURLError",
    "InvalidRequestBodyError",
    "AssociationNotFoundError",
    "StoreUnavailableError",
    "AssociationStore",
    "MemoryAssociationStore",
    "SQLiteAssociationStore",
    "MongoAssociationStore",
]
