"""Domain and API models."""

from code_indexer.models.chunk import Chunk, ChunkKind, EmbeddingRecord
from code_indexer.models.file_node import FileNode
from code_indexer.models.indexing import (
    IndexFailureResponse,
    IndexingResult,
    IndexOutcome,
    IndexRequest,
    IndexResponse,
)
from code_indexer.models.search import (
    SearchHit,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
    StoredChunk,
)
from code_indexer.models.session import ClearSessionResponse, SessionChunksResponse

__all__ = [
    "Chunk",
    "ChunkKind",
    "ClearSessionResponse",
    "EmbeddingRecord",
    "FileNode",
    "IndexFailureResponse",
    "IndexingResult",
    "IndexOutcome",
    "IndexRequest",
    "IndexResponse",
    "SearchHit",
    "SearchRequest",
    "SearchResponse",
    "SearchResultItem",
    "SessionChunksResponse",
    "StoredChunk",
]
