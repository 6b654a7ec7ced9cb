"""
Retrieval service orchestrator.

Embeds a query and runs a session-scoped nearest-neighbour search.

Dependencies: code_indexer.boundary
System role: Retrieval orchestration
"""

import logging

from code_indexer.boundary.embeddings.embedding_client import EmbeddingClient
from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.core.exceptions import ValidationError
from code_indexer.models.search import SearchHit

logger = logging.getLogger(__name__)

MAX_SEARCH_LIMIT = 100


class RetrievalService:
    """Query-text search over one session's chunks."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        gateway: MilvusGateway,
        default_limit: int = 5,
    ) -> None:
        self._embedding_client = embedding_client
        self._gateway = gateway
        self.default_limit = default_limit

    async def search(
        self,
        session_id: str,
        query_text: str,
        limit: int | None = None,
    ) -> list[SearchHit]:
        """
        Embed the query and return the session's nearest chunks.

        Args:
            session_id: Session to search
            query_text: Natural-language or code query
            limit: Maximum hits (defaults to default_limit)

        Returns:
            list[SearchHit]: Ranked hits

        Raises:
            ValidationError: Empty session/query or limit outside [1, 100]
            EmbeddingError: Query embedding failed (no partial result)
            VectorStoreError: Search failed
        """
        limit = self.default_limit if limit is None else limit
        if not session_id or not session_id.strip():
            raise ValidationError("session_id is required", field="session_id")
        if not query_text or not query_text.strip():
            raise ValidationError("query_text is required", field="query_text")
        if not 1 <= limit <= MAX_SEARCH_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_SEARCH_LIMIT}", field="limit")

        query_vector = await self._embedding_client.embed_query(query_text)
        hits = await self._gateway.search(query_vector, session_id, limit)
        logger.info(
            f"Retrieved {len(hits)} hits for query",
            extra={"session_id": session_id, "query_preview": query_text[:50]},
        )
        return hits
