"""
Session API response models.

Dependencies: pydantic
System role: Session endpoint contracts
"""

from code_indexer.models.base import CamelModel
from code_indexer.models.search import StoredChunk


class SessionChunksResponse(CamelModel):
    """Chunks stored for one session."""

    session_id: str
    total: int
    chunks: list[StoredChunk]


class ClearSessionResponse(CamelModel):
    """Result of deleting a session's data."""

    session_id: str
    message: str
    deleted: int | None = None
