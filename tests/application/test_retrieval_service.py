"""
Test suite for RetrievalService and SessionService.

System role: Verification of query orchestration and session teardown
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from code_indexer.application import RetrievalService, SessionService
from code_indexer.core.exceptions import EmbeddingError, ValidationError
from code_indexer.models.search import SearchHit

HIT = SearchHit(id=1, score=0.92, content="def login(): ...", file_path="auth.py", session_id="s1")


@pytest.fixture
def mock_embedding_client() -> MagicMock:
    client = MagicMock()
    client.embed_query = AsyncMock(return_value=[1.0, 0.0, 0.0])
    return client


@pytest.fixture
def mock_gateway() -> MagicMock:
    gateway = MagicMock()
    gateway.search = AsyncMock(return_value=[HIT])
    gateway.query_session = AsyncMock(return_value=[])
    gateway.delete_session = AsyncMock(return_value=4)
    return gateway


class TestRetrievalService:
    """Test suite for RetrievalService.search()."""

    @pytest.mark.asyncio
    async def test_embeds_then_searches(self, mock_embedding_client, mock_gateway) -> None:
        service = RetrievalService(mock_embedding_client, mock_gateway)

        hits = await service.search("s1", "login handler")

        assert hits == [HIT]
        mock_embedding_client.embed_query.assert_awaited_once_with("login handler")
        mock_gateway.search.assert_awaited_once_with([1.0, 0.0, 0.0], "s1", 5)

    @pytest.mark.asyncio
    async def test_explicit_limit(self, mock_embedding_client, mock_gateway) -> None:
        service = RetrievalService(mock_embedding_client, mock_gateway, default_limit=10)

        await service.search("s1", "q", limit=3)

        assert mock_gateway.search.await_args.args[2] == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("session_id", "query", "limit"),
        [("", "q", None), ("s1", "  ", None), ("s1", "q", 0), ("s1", "q", 101)],
    )
    async def test_invalid_input(self, mock_embedding_client, mock_gateway, session_id, query, limit) -> None:
        service = RetrievalService(mock_embedding_client, mock_gateway)

        with pytest.raises(ValidationError):
            await service.search(session_id, query, limit=limit)

        mock_embedding_client.embed_query.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_embedding_failure_skips_search(self, mock_embedding_client, mock_gateway) -> None:
        mock_embedding_client.embed_query.side_effect = EmbeddingError("quota exceeded")
        service = RetrievalService(mock_embedding_client, mock_gateway)

        with pytest.raises(EmbeddingError):
            await service.search("s1", "q")

        mock_gateway.search.assert_not_awaited()


class TestSessionService:
    """Test suite for SessionService."""

    @pytest.mark.asyncio
    async def test_clear_session(self, mock_gateway) -> None:
        service = SessionService(mock_gateway)

        assert await service.clear_session("s1") == 4
        mock_gateway.delete_session.assert_awaited_once_with("s1")

    @pytest.mark.asyncio
    async def test_list_chunks(self, mock_gateway) -> None:
        service = SessionService(mock_gateway)

        await service.list_chunks("s1", limit=20)

        mock_gateway.query_session.assert_awaited_once_with("s1", limit=20)
