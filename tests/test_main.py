"""Tests for URL Shortener Service."""

import logging
import re
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from urlshortener.main import app
from urlshortener.core.config import Settings
from urlshortener.core.exceptions import StoreUnavailableError
from urlshortener.core.store import AssociationStore, MemoryAssociationStore
from urlshortener.models import URLAssociation
from urlshortener.utils.shortener import is_valid_url, validate_short_code

SHORT_ID_RE = re.compile(r"^[0-9a-v]{20}$")
MISSING_ID = "abcdefghi12345678910"


def create(client, url="http://google.com"):
    response = client.post("/", json={"url": url})
    assert response.status_code == 200
    return response.json()


class TestShortenerLogic:
    """Tests for URL and short id validation."""

    def test_validate_short_code_valid(self):
        valid_codes = ["abcdefghi12345678910", "0" * 20, "v" * 20, "c9kq3h0ftn1d4t1bf3a0"]
        for code in valid_codes:
            assert validate_short_code(code) is True

    def test_validate_short_code_invalid(self):
        invalid_codes = [
            "",
            "abc123",  # too short
            "a" * 21,  # too long
            "w" * 20,  # outside base32hex
            "ABCDEFGHI12345678910",  # uppercase
            "abcdefghi1234567891-",
        ]
        for code in invalid_codes:
            assert validate_short_code(code) is False

    def test_valid_urls(self):
        valid_urls = [
            "http://google.com",
            "https://example.com/path?q=1#frag",
            "ftp://files.example.com/pub",
            "http://localhost:8080",
            "http://127.0.0.1/",
            "file:///etc/hosts",
        ]
        for url in valid_urls:
            assert is_valid_url(url) is True, url

    def test_invalid_urls(self):
        invalid_urls = [
            "",
            "not-a-url",
            "google.com",
            "/relative/path",
            "localhost:8080",
            "mailto:user@example.com",
            "http://exa mple.com",
            "http://[::1",
            "http://example.com:port",
            " http://example.com",
            "1http://example.com",
        ]
        for url in invalid_urls:
            assert is_valid_url(url) is False, url


class TestCreateAssociation:
    """Tests for POST / endpoint."""

    def test_create_success(self, client, test_store):
        response = client.post("/", json={"url": "http://google.com"})
        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"uuid", "url"}
        assert data["url"] == "http://google.com"
        assert SHORT_ID_RE.match(data["uuid"])
        assert test_store.find_by_id(data["uuid"]).url == "http://google.com"

    def test_create_ids_are_unique(self, client):
        ids = {create(client)["uuid"] for _ in range(20)}
        assert len(ids) == 20

    def test_create_invalid_url(self, client, test_store):
        response = client.post("/", json={"url": "not-a-url"})
        assert response.status_code == 400
        assert response.text == "Invalid url format"
        assert test_store.list_all() == []

    def test_create_missing_url(self, client):
        response = client.post("/", json={})
        assert response.status_code == 400
        assert response.text == "Invalid url format"

    def test_create_malformed_json(self, client):
        response = client.post(
            "/", content="{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.text == "Unable to parse json"

    def test_create_empty_body(self, client):
        response = client.post("/")
        assert response.status_code == 400
        assert response.text == "Unable to parse json"

    @pytest.mark.parametrize("payload", [[], "http://google.com", {"url": 42}, {"url": None}])
    def test_create_wrong_json_shape(self, client, payload):
        response = client.post("/", json=payload)
        assert response.status_code == 400
        assert response.text == "Unable to parse json"

    def test_create_ignores_unknown_fields(self, client):
        response = client.post("/", json={"url": "http://google.com", "uuid": "x" * 20})
        assert response.status_code == 200
        assert SHORT_ID_RE.match(response.json()["uuid"])

    def test_create_store_unavailable(self, make_client):
        store = MagicMock(spec=AssociationStore)
        store.insert.side_effect = StoreUnavailableError("Can not associate url")
        client = make_client(store)

        response = client.post("/", json={"url": "http://google.com"})
        assert response.status_code == 500
        assert response.text == "Can not associate url"


class TestRedirectEndpoint:
    """Tests for GET /{uuid} endpoint."""

    def test_redirect_success(self, client):
        uuid = create(client)["uuid"]

        response = client.get(f"/{uuid}", follow_redirects=False)
        assert response.status_code == 301
        assert response.headers["location"] == "http://google.com"

    def test_redirect_is_repeatable(self, client):
        uuid = create(client, "https://example.com/a?b=c")["uuid"]

        locations = {
            client.get(f"/{uuid}", follow_redirects=False).headers["location"]
            for _ in range(5)
        }
        assert locations == {"https://example.com/a?b=c"}

    def test_redirect_not_found(self, client):
        response = client.get(f"/{MISSING_ID}", follow_redirects=False)
        assert response.status_code == 400
        assert "URL not found" in response.text

    @pytest.mark.parametrize(
        "path", ["/nonexistent", "/" + "a" * 21, "/" + "w" * 20, "/ABCDEFGHI12345678910"]
    )
    def test_redirect_malformed_id(self, client, path):
        response = client.get(path, follow_redirects=False)
        assert response.status_code == 404


class TestDeleteEndpoint:
    """Tests for DELETE /{uuid} endpoint."""

    def test_delete_lifecycle(self, client):
        uuid = create(client)["uuid"]
        assert client.get(f"/{uuid}", follow_redirects=False).status_code == 301

        response = client.delete(f"/{uuid}")
        assert response.status_code == 200
        assert response.content == b""

        response = client.get(f"/{uuid}", follow_redirects=False)
        assert response.status_code == 400
        assert "URL not found" in response.text

    def test_delete_not_found(self, client):
        response = client.delete(f"/{MISSING_ID}")
        assert response.status_code == 400
        assert response.text == "URL not found"

    def test_delete_twice(self, client):
        uuid = create(client)["uuid"]
        assert client.delete(f"/{uuid}").status_code == 200
        assert client.delete(f"/{uuid}").status_code == 400

    def test_delete_malformed_id(self, client):
        assert client.delete("/abc").status_code == 404


class TestUpdateEndpoint:
    """Tests for PUT /{uuid} endpoint."""

    def test_update_success(self, client):
        uuid = create(client)["uuid"]

        response = client.put(f"/{uuid}", json={"url": "http://new.example"})
        assert response.status_code == 200
        assert response.content == b""

        redirect_response = client.get(f"/{uuid}", follow_redirects=False)
        assert redirect_response.headers["location"] == "http://new.example"

    def test_update_keeps_id(self, client):
        uuid = create(client)["uuid"]
        client.put(f"/{uuid}", json={"url": "http://new.example"})

        assert client.get("/").json() == [{"uuid": uuid, "url": "http://new.example"}]

    def test_update_not_found(self, client):
        response = client.put(f"/{MISSING_ID}", json={"url": "http://new.example"})
        assert response.status_code == 400
        assert response.text == "URL not found"

    def test_update_invalid_url(self, client):
        uuid = create(client)["uuid"]

        response = client.put(f"/{uuid}", json={"url": "not-a-url"})
        assert response.status_code == 400
        assert response.text == "Invalid url format"
        assert client.get(f"/{uuid}", follow_redirects=False).headers["location"] == "http://google.com"

    def test_update_validates_url_before_lookup(self, client):
        response = client.put(f"/{MISSING_ID}", json={"url": "not-a-url"})
        assert response.status_code == 400
        assert response.text == "Invalid url format"

    def test_update_malformed_json(self, client):
        uuid = create(client)["uuid"]
        response = client.put(
            f"/{uuid}", content="nope", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.text == "Unable to parse json"

    def test_update_malformed_id(self, client):
        response = client.put("/short", json={"url": "http://new.example"})
        assert response.status_code == 404


class TestListEndpoint:
    """Tests for GET / endpoint."""

    def test_list_empty(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == []

    def test_list_with_data(self, client):
        created = [create(client, f"https://example{i}.com") for i in range(3)]

        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 3
        assert sorted(data, key=lambda a: a["uuid"]) == sorted(created, key=lambda a: a["uuid"])

    def test_list_store_unavailable(self, make_client):
        store = MagicMock(spec=AssociationStore)
        store.list_all.side_effect = StoreUnavailableError("Can not retrieve url associations")
        client = make_client(store)

        response = client.get("/")
        assert response.status_code == 500
        assert response.text == "Can not retrieve url associations"

    def test_list_memory_store(self, make_client):
        store = MemoryAssociationStore(
            [URLAssociation(uuid=MISSING_ID, url="http://google.com")]
        )
        client = make_client(store)

        assert client.get("/").json() == [{"uuid": MISSING_ID, "url": "http://google.com"}]


class TestMethodsAndPaths:
    """Tests for unmatched routes."""

    def test_put_on_collection_not_allowed(self, client):
        assert client.put("/", json={"url": "http://google.com"}).status_code == 405

    def test_post_on_id_not_allowed(self, client):
        assert client.post(f"/{MISSING_ID}", json={"url": "http://google.com"}).status_code == 405

    def test_nested_path_not_found(self, client):
        assert client.get(f"/{MISSING_ID}/info").status_code == 404


class TestMetricsEndpoint:
    """Tests for GET /metrics endpoint."""

    def test_metrics_buckets_exposed(self, client):
        client.get("/")
        response = client.get("/metrics")
        assert response.status_code == 200
        body = response.text
        for bound in ("0.3", "1.0", "5.0", "10.0", "+Inf"):
            assert f'http_request_duration_seconds_bucket{{le="{bound}"}}' in body
        assert "http_request_duration_seconds_sum" in body
        assert "http_request_duration_seconds_count" in body

    def test_requests_are_counted(self, client):
        before = REGISTRY.get_sample_value("http_request_duration_seconds_count") or 0.0

        client.get("/")
        client.post("/", json={"url": "not-a-url"})
        client.get(f"/{MISSING_ID}", follow_redirects=False)

        after = REGISTRY.get_sample_value("http_request_duration_seconds_count")
        assert after == before + 3

    def test_metrics_scrape_not_counted(self, client):
        before = REGISTRY.get_sample_value("http_request_duration_seconds_count") or 0.0
        client.get("/metrics")
        after = REGISTRY.get_sample_value("http_request_duration_seconds_count") or 0.0
        assert after == before


    def test_unhandled_error_is_logged_and_counted(self, make_client, caplog):
        store = MagicMock(spec=AssociationStore)
        store.list_all.side_effect = RuntimeError("boom")
        client = make_client(store)
        caplog.set_level(logging.INFO, logger="urlshortener.requests")
        before = REGISTRY.get_sample_value("http_request_duration_seconds_count") or 0.0

        response = client.get("/")

        assert response.status_code == 500
        assert response.text == "Internal server error"
        after = REGISTRY.get_sample_value("http_request_duration_seconds_count")
        assert after == before + 1
        request_lines = [
            r.getMessage() for r in caplog.records if r.name == "urlshortener.requests"
        ]
        assert any("Handle GET / - Status: 500" in line for line in request_lines)


class TestStoreUnavailable:
    """Store failures surface as 500 on every id route."""

    @pytest.mark.parametrize(
        "method, store_call",
        [
            ("GET", "find_by_id"),
            ("PUT", "update_target"),
            ("DELETE", "delete_by_id"),
        ],
    )
    def test_id_routes_store_unavailable(self, make_client, method, store_call):
        store = MagicMock(spec=AssociationStore)
        getattr(store, store_call).side_effect = StoreUnavailableError("Query execution failed")
        client = make_client(store)

        kwargs = {"json": {"url": "http://new.example"}} if method == "PUT" else {}
        response = client.request(method, f"/{MISSING_ID}", follow_redirects=False, **kwargs)

        assert response.status_code == 500
        assert response.text == "Query execution failed"


class TestLifespan:
    """Tests for store setup in the application lifespan."""

    def test_lifespan_opens_configured_store(self, monkeypatch):
        monkeypatch.setattr("urlshortener.main.settings", Settings(store_backend="memory"))

        with TestClient(app) as client:
            assert isinstance(app.state.store, MemoryAssociationStore)
            uuid = create(client)["uuid"]
            response = client.get(f"/{uuid}", follow_redirects=False)
            assert response.status_code == 301

    def test_lifespan_fails_without_store(self, monkeypatch):
        def unreachable(settings):
            raise StoreUnavailableError("Cannot connect to MongoDB")

        monkeypatch.setattr("urlshortener.main.create_store", unreachable)

        with pytest.raises(StoreUnavailableError):
            with TestClient(app):
                pass


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
