"""
Indexing outcome and payload models.

IndexingResult is what the orchestrator returns; IndexResponse and
IndexFailureResponse are the caller-facing payloads.

Dependencies: pydantic
System role: Indexing result contract
"""

from enum import Enum

from pydantic import BaseModel, Field

from code_indexer.models.base import CamelModel
from code_indexer.models.file_node import FileNode


class IndexOutcome(str, Enum):
    """Terminal state of an indexing run that did not raise."""

    INDEXED = "indexed"
    NO_EMBEDDINGS = "no_embeddings"


class IndexingResult(BaseModel):
    """Counts and timings from one indexing run."""

    outcome: IndexOutcome
    session_id: str
    inserted_count: int = 0
    files_processed: int = 0
    processing_time_ms: float = Field(description="Chunking + embedding phase")
    indexing_time_ms: float = Field(default=0.0, description="Insert + index build phase")

    @property
    def elapsed_ms(self) -> float:
        return self.processing_time_ms + self.indexing_time_ms


class IndexRequest(CamelModel):
    """Body of POST /index."""

    session_id: str = Field(min_length=1)
    code_files: list[FileNode]


class IndexResponse(CamelModel):
    """Successful indexing payload."""

    success: bool = True
    message: str = "Codebase indexed successfully."
    total_chunks: int
    processing_time: float = Field(description="Milliseconds spent chunking and embedding")
    indexing_time: float = Field(description="Milliseconds spent inserting and building the index")


class IndexFailureResponse(CamelModel):
    """Structured failure payload; `error` is only set in development."""

    success: bool = False
    message: str
    details: str | None = None
    processing_time: float | None = None
    error: str | None = None
    no_embeddings: bool = Field(default=False, exclude=True)
