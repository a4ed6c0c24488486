"""
FastAPI dependencies for dependency injection.

The store is built once by the application lifespan and kept on
``app.state``; routes receive it, wrapped in an AssociationService, through
these dependencies. Tests swap the store by overriding ``get_store``.
"""

from fastapi import Depends, Request

from .core.config import Settings
from .core.database import SQLiteAssociationStore
from .core.mongo import MongoAssociationStore
from .core.store import AssociationStore, MemoryAssociationStore
from .services.association_service import AssociationService


def create_store(settings: Settings) -> AssociationStore:
    """
    Build the store named by ``settings.store_backend``.

    Raises:
        StoreUnavailableError: If the store cannot be reached.
        ValueError: If the backend name is unknown.
    """
    backend = settings.store_backend
    if backend == "mongo":
        password = settings.mongo_password
        return MongoAssociationStore.connect(
            uri=settings.mongo_uri,
            database=settings.mongo_database,
            collection=settings.mongo_collection,
            username=settings.mongo_username,
            password=password.get_secret_value() if password else None,
            timeout_ms=settings.mongo_timeout_ms,
        )
    if backend == "sqlite":
        store = SQLiteAssociationStore(settings.sqlite_path)
        store.init_db()
        return store
    if backend == "memory":
        return MemoryAssociationStore()
    raise ValueError(f"Unknown store backend: {backend}")


def get_store(request: Request) -> AssociationStore:
    """Get the store created at startup."""
    return request.app.state.store


def get_association_service(
    store: AssociationStore = Depends(get_store),
) -> AssociationService:
    """Get an AssociationService bound to the shared store."""
    return AssociationService(store)
