"""
Search request/response models.

Dependencies: pydantic
System role: Retrieval result shapes and search API contract
"""

from pydantic import BaseModel, Field

from code_indexer.models.base import CamelModel


class SearchHit(BaseModel):
    """Single ranked hit from a session-scoped vector search."""

    id: int | str = Field(description="Store-assigned row identifier")
    score: float = Field(description="Similarity score")
    content: str
    file_path: str
    session_id: str
    start_line: int | None = None
    end_line: int | None = None
    chunk_type: str | None = None


class StoredChunk(CamelModel):
    """Chunk row read back from the store without its vector."""

    id: int | str
    content: str
    file_path: str
    session_id: str
    start_line: int | None = None
    end_line: int | None = None
    chunk_type: str | None = None


class SearchRequest(CamelModel):
    """Body of POST /search."""

    session_id: str = Field(min_length=1)
    query_text: str = Field(min_length=1)
    limit: int | None = Field(default=None, ge=1, le=100)


class SearchResultItem(CamelModel):
    """Search hit as returned to API clients."""

    file_path: str
    content: str
    similarity: float
    start_line: int | None = None
    end_line: int | None = None
    chunk_type: str | None = None

    @classmethod
    def from_hit(cls, hit: SearchHit) -> "SearchResultItem":
        return cls(
            file_path=hit.file_path,
            content=hit.content,
            similarity=hit.score,
            start_line=hit.start_line,
            end_line=hit.end_line,
            chunk_type=hit.chunk_type,
        )


class SearchResponse(CamelModel):
    """Body returned by POST /search."""

    success: bool = True
    message: str
    results: list[SearchResultItem]
