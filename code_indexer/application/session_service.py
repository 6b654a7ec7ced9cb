"""
Session service.

Reads back and tears down a session's stored chunks.

Dependencies: code_indexer.boundary.vdb
System role: Session data management
"""

import logging

from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.models.search import StoredChunk

logger = logging.getLogger(__name__)


class SessionService:
    """Session-level operations over the shared collection."""

    def __init__(self, gateway: MilvusGateway) -> None:
        self._gateway = gateway

    async def list_chunks(self, session_id: str, limit: int = 1000) -> list[StoredChunk]:
        """Return up to `limit` stored chunks for the session."""
        return await self._gateway.query_session(session_id, limit=limit)

    async def clear_session(self, session_id: str) -> int | None:
        """Delete every stored chunk of the session."""
        deleted = await self._gateway.delete_session(session_id)
        logger.info("Session cleared", extra={"session_id": session_id, "deleted": deleted})
        return deleted
