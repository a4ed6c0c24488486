"""Shared fixtures for URL Shortener Service tests."""

import sys
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from urlshortener.main import app
from urlshortener.core.database import SQLiteAssociationStore
from urlshortener.dependencies import get_store


@pytest.fixture
def test_store():
    """Create a test store backed by an in-memory SQLite database."""
    store = SQLiteAssociationStore(":memory:")
    store.init_db()
    yield store
    store.close()


@pytest.fixture
def make_client():
    """Build test clients bound to a given store."""
    original_lifespan = app.router.lifespan_context

    # Replace the lifespan so no real store is opened; the store comes
    # from the dependency override instead
    @asynccontextmanager
    async def test_lifespan(app):
        yield

    app.router.lifespan_context = test_lifespan
    clients = []

    def _make(store):
        app.dependency_overrides[get_store] = lambda: store
        client = TestClient(app, raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
    app.router.lifespan_context = original_lifespan
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, test_store):
    """Create a test client using the test store."""
    return make_client(test_store)
