"""
Integration tests for the catalog API.

Demonstrates:
- Swapping the service through FastAPI dependency overrides
- Testing query parameter -> ModelFilter mapping
- Testing error mapping at the HTTP boundary (404, 502)
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from llm_catalog.api.deps import get_catalog_service
from llm_catalog.main import app
from llm_catalog.service.catalog import CatalogService
from llm_catalog.service.client_pool import ClientPool


@pytest.fixture
def seeded_service(catalog_service: CatalogService, catalog_document) -> CatalogService:
    catalog_service.ingest(catalog_document)
    return catalog_service


@pytest.fixture
def client(seeded_service: CatalogService):
    """Test client serving the seeded in-memory catalog."""
    app.dependency_overrides[get_catalog_service] = lambda: seeded_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_list_all_models(client: TestClient):
    response = client.get("/models")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 5
    assert {m["path"] for m in data["models"]} >= {"openai/openai/gpt-4o-mini", "openrouter/alibaba/qwen/qwen3-coder"}


def test_query_params_filter_models(client: TestClient):
    """Demonstrates: Each query param becomes one ModelFilter constraint."""
    response = client.get("/models", params={"provider": "openai", "supports_vision": "true"})

    paths = [m["path"] for m in response.json()["models"]]
    assert paths == ["openai/openai/gpt-4o-mini"]


def test_get_model_by_path(client: TestClient):
    """Demonstrates: Composite keys contain slashes and still route."""
    response = client.get("/models/openrouter/anthropic/anthropic/claude-sonnet-4")

    assert response.status_code == 200
    data = response.json()
    assert data["vendor_name"] == "anthropic"
    assert data["cost"]["prompt"] == 3 / 1_000_000


def test_unknown_model_is_404(client: TestClient):
    response = client.get("/models/openai/openai/does-not-exist")

    assert response.status_code == 404
    assert "does-not-exist" in response.json()["detail"]


def test_list_providers(client: TestClient):
    response = client.get("/providers")

    assert response.json() == {"providers": ["anthropic", "openai", "openrouter"]}


def test_refresh_returns_report(normalizer, catalog_document):
    """Demonstrates: The refresh endpoint returns the IngestionReport contract."""

    class MockedClientPool(ClientPool):
        def _build(self, base_url: str) -> httpx.Client:
            return httpx.Client(
                base_url=base_url,
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json=catalog_document)),
            )

    service = CatalogService(normalizer=normalizer, client_pool=MockedClientPool())
    app.dependency_overrides[get_catalog_service] = lambda: service
    try:
        response = TestClient(app).post("/models/refresh")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    data = response.json()
    assert data["loaded"] == 5
    assert data["dropped_count"] == 0
    assert len(service.registry) == 5


def test_refresh_failure_is_502(normalizer):
    def unreachable(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    class UnreachablePool(ClientPool):
        def _build(self, base_url: str) -> httpx.Client:
            return httpx.Client(base_url=base_url, transport=httpx.MockTransport(unreachable))

    service = CatalogService(normalizer=normalizer, client_pool=UnreachablePool())
    app.dependency_overrides[get_catalog_service] = lambda: service
    try:
        response = TestClient(app).post("/models/refresh")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert len(service.registry) == 0


def test_refresh_with_non_object_body_is_502(normalizer):
    """Demonstrates: A 200 with the wrong JSON shape is an upstream failure, not a 500."""

    class ListBodyPool(ClientPool):
        def _build(self, base_url: str) -> httpx.Client:
            return httpx.Client(
                base_url=base_url,
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json=["not", "a", "catalog"])),
            )

    service = CatalogService(normalizer=normalizer, client_pool=ListBodyPool())
    app.dependency_overrides[get_catalog_service] = lambda: service
    try:
        response = TestClient(app).post("/models/refresh")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 502
    assert "mapping" in response.json()["detail"]
