"""
Test suite for the HTTP API.

Uses FastAPI dependency overrides to replace services with mocks.

System role: Verification of routing, status codes and wire format
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from code_indexer.api.dependencies import (
    ServiceCache,
    get_indexing_service,
    get_retrieval_service,
    get_service_cache,
    get_session_service,
)
from code_indexer.api.main import create_app
from code_indexer.application.indexing_service import IndexingService
from code_indexer.configs import Settings
from code_indexer.core.exceptions import EmbeddingError, ValidationError, VectorStoreError
from code_indexer.models.indexing import IndexingResult, IndexOutcome
from code_indexer.models.search import SearchHit, StoredChunk

INDEX_BODY = {
    "sessionId": "s1",
    "codeFiles": [
        {"name": "app.py", "path": "src/app.py", "type": "file", "content": "def f(): pass"},
    ],
}


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def mock_orchestrator() -> MagicMock:
    orchestrator = MagicMock()
    orchestrator.index_session = AsyncMock(
        return_value=IndexingResult(
            outcome=IndexOutcome.INDEXED,
            session_id="s1",
            inserted_count=1,
            files_processed=1,
            processing_time_ms=10.0,
            indexing_time_ms=20.0,
        )
    )
    return orchestrator


@pytest.fixture
def indexing_client(app, mock_orchestrator):
    app.dependency_overrides[get_indexing_service] = lambda: IndexingService(mock_orchestrator)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_retrieval_service() -> MagicMock:
    service = MagicMock()
    service.search = AsyncMock(
        return_value=[
            SearchHit(
                id=1,
                score=0.87,
                content="def f(): pass",
                file_path="src/app.py",
                session_id="s1",
                start_line=1,
                end_line=1,
                chunk_type="function",
            )
        ]
    )
    return service


@pytest.fixture
def search_client(app, mock_retrieval_service):
    app.dependency_overrides[get_retrieval_service] = lambda: mock_retrieval_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_session_service() -> MagicMock:
    service = MagicMock()
    service.list_chunks = AsyncMock(
        return_value=[StoredChunk(id=9, content="x = 1", file_path="a.py", session_id="s1", start_line=2)]
    )
    service.clear_session = AsyncMock(return_value=4)
    return service


@pytest.fixture
def session_client(app, mock_session_service):
    app.dependency_overrides[get_session_service] = lambda: mock_session_service
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Test suite for health endpoints."""

    def test_health_check(self, client) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_vector_store_health(self, app) -> None:
        cache = MagicMock()
        cache.gateway.has_collection = AsyncMock(return_value=True)
        app.dependency_overrides[get_service_cache] = lambda: cache

        response = TestClient(app).get("/api/v1/health/vector-store")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Vector store accessible"}

    def test_vector_store_unreachable(self, app) -> None:
        cache = MagicMock()
        cache.gateway.has_collection = AsyncMock(side_effect=VectorStoreError("connection refused"))
        app.dependency_overrides[get_service_cache] = lambda: cache

        response = TestClient(app).get("/api/v1/health/vector-store")

        assert response.status_code == 503


class TestIndexEndpoint:
    """Test suite for POST /index."""

    def test_success(self, indexing_client, mock_orchestrator) -> None:
        response = indexing_client.post("/api/v1/index", json=INDEX_BODY)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Codebase indexed successfully.",
            "totalChunks": 1,
            "processingTime": 10.0,
            "indexingTime": 20.0,
        }
        session_id, files = mock_orchestrator.index_session.await_args.args
        assert session_id == "s1"
        assert files[0].path == "src/app.py"

    def test_no_embeddings_is_400(self, indexing_client, mock_orchestrator) -> None:
        mock_orchestrator.index_session.return_value = IndexingResult(
            outcome=IndexOutcome.NO_EMBEDDINGS,
            session_id="s1",
            processing_time_ms=3.0,
        )

        response = indexing_client.post("/api/v1/index", json=INDEX_BODY)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "No embeddings could be generated",
            "details": "Check file contents and embedding generation",
            "processingTime": 3.0,
        }

    def test_store_failure_is_500(self, indexing_client, mock_orchestrator) -> None:
        mock_orchestrator.index_session.side_effect = VectorStoreError("insert failed", operation="insert")

        response = indexing_client.post("/api/v1/index", json=INDEX_BODY)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert body["message"] == "insert failed"
        assert "error" not in body

    def test_blank_session_is_400(self, indexing_client, mock_orchestrator) -> None:
        mock_orchestrator.index_session.side_effect = ValidationError("session_id is required")

        response = indexing_client.post("/api/v1/index", json={**INDEX_BODY, "sessionId": "   "})

        assert response.status_code == 400

    def test_invalid_body_is_422(self, indexing_client) -> None:
        response = indexing_client.post("/api/v1/index", json={"sessionId": "s1"})

        assert response.status_code == 422


class TestSearchEndpoint:
    """Test suite for POST /search."""

    def test_success(self, search_client, mock_retrieval_service) -> None:
        response = search_client.post(
            "/api/v1/search",
            json={"sessionId": "s1", "queryText": "where is f", "limit": 3},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Found 1 results"
        assert body["results"] == [
            {
                "filePath": "src/app.py",
                "content": "def f(): pass",
                "similarity": 0.87,
                "startLine": 1,
                "endLine": 1,
                "chunkType": "function",
            }
        ]
        mock_retrieval_service.search.assert_awaited_once_with("s1", "where is f", limit=3)

    def test_embedding_failure_is_502(self, search_client, mock_retrieval_service) -> None:
        mock_retrieval_service.search.side_effect = EmbeddingError("quota exceeded")

        response = search_client.post("/api/v1/search", json={"sessionId": "s1", "queryText": "q"})

        assert response.status_code == 502

    def test_store_failure_is_503(self, search_client, mock_retrieval_service) -> None:
        mock_retrieval_service.search.side_effect = VectorStoreError("search failed", operation="search")

        response = search_client.post("/api/v1/search", json={"sessionId": "s1", "queryText": "q"})

        assert response.status_code == 503

    @pytest.mark.parametrize(
        "body",
        [
            {"sessionId": "s1"},
            {"sessionId": "", "queryText": "q"},
            {"sessionId": "s1", "queryText": "q", "limit": 0},
            {"sessionId": "s1", "queryText": "q", "limit": 101},
        ],
    )
    def test_invalid_body_is_422(self, search_client, body) -> None:
        response = search_client.post("/api/v1/search", json=body)

        assert response.status_code == 422


class TestSessionEndpoints:
    """Test suite for session endpoints."""

    def test_list_chunks(self, session_client, mock_session_service) -> None:
        response = session_client.get("/api/v1/sessions/s1/chunks", params={"limit": 10})

        assert response.status_code == 200
        body = response.json()
        assert body["sessionId"] == "s1"
        assert body["total"] == 1
        assert body["chunks"][0]["filePath"] == "a.py"
        assert body["chunks"][0]["startLine"] == 2
        mock_session_service.list_chunks.assert_awaited_once_with("s1", limit=10)

    def test_clear_session(self, session_client, mock_session_service) -> None:
        response = session_client.delete("/api/v1/sessions/s1")

        assert response.status_code == 200
        assert response.json() == {"sessionId": "s1", "message": "Session data deleted", "deleted": 4}
        mock_session_service.clear_session.assert_awaited_once_with("s1")


@pytest.fixture
def unreachable_store_client(app, monkeypatch):
    """Client whose vector store gateway cannot be built."""
    monkeypatch.setenv("ENVIRONMENT", "production")
    monkeypatch.delenv("DEBUG", raising=False)
    monkeypatch.setattr("code_indexer.api.dependencies.get_settings", lambda: Settings())
    monkeypatch.setattr("code_indexer.api.dependencies._service_cache", ServiceCache())
    with patch(
        "code_indexer.boundary.embeddings.get_embedding_client",
        return_value=MagicMock(),
    ), patch(
        "code_indexer.boundary.vdb.get_vector_store_gateway",
        side_effect=VectorStoreError("Failed to connect to vector store: refused", operation="connect"),
    ):
        yield TestClient(app)


class TestClientConstructionFailures:
    """Failures raised while building services, before the route body runs."""

    def test_search_is_503(self, unreachable_store_client) -> None:
        response = unreachable_store_client.post("/api/v1/search", json={"sessionId": "s1", "queryText": "q"})

        assert response.status_code == 503
        assert response.json() == {"detail": "Failed to connect to vector store: refused"}

    def test_list_chunks_is_503(self, unreachable_store_client) -> None:
        response = unreachable_store_client.get("/api/v1/sessions/s1/chunks")

        assert response.status_code == 503

    def test_clear_session_is_503(self, unreachable_store_client) -> None:
        response = unreachable_store_client.delete("/api/v1/sessions/s1")

        assert response.status_code == 503

    def test_index_returns_failure_payload(self, unreachable_store_client) -> None:
        response = unreachable_store_client.post("/api/v1/index", json=INDEX_BODY)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Failed to connect to vector store: refused",
        }

    def test_index_exposes_error_in_development(self, unreachable_store_client, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")

        response = unreachable_store_client.post("/api/v1/index", json=INDEX_BODY)

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "refused" in body["error"]
