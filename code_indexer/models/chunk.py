"""
Chunk domain models.

Chunk is the chunker's output for a single file; EmbeddingRecord pairs a chunk
with its vector and is the unit handed to the vector store.

Dependencies: pydantic
System role: Data structures for the indexing pipeline
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChunkKind(str, Enum):
    """Structural kind of a chunk."""

    FUNCTION = "function"
    CLASS = "class"
    BLOCK = "block"
    FILE = "file"


class Chunk(BaseModel):
    """Contiguous slice of one file's source text."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Chunk text content")
    start_line: int | None = Field(default=None, ge=1, description="1-based first line")
    end_line: int | None = Field(default=None, ge=1, description="1-based last line")
    kind: ChunkKind | None = Field(default=None, description="Structural kind")


class EmbeddingRecord(BaseModel):
    """Chunk plus vector, scoped to one session."""

    content: str = Field(description="Chunk text content")
    file_path: str = Field(description="Path of the source file within the upload")
    embedding: list[float] = Field(description="Embedding vector")
    session_id: str = Field(description="Owning session")
    start_line: int | None = Field(default=None)
    end_line: int | None = Field(default=None)
    chunk_type: str | None = Field(default=None)

    @classmethod
    def from_chunk(
        cls,
        chunk: Chunk,
        embedding: list[float],
        file_path: str,
        session_id: str,
    ) -> "EmbeddingRecord":
        """Pair a chunk with its embedding."""
        return cls(
            content=chunk.content,
            file_path=file_path,
            embedding=embedding,
            session_id=session_id,
            start_line=chunk.start_line,
            end_line=chunk.end_line,
            chunk_type=chunk.kind.value if chunk.kind else None,
        )

    def to_row(self, vector_field: str = "embedding") -> dict[str, Any]:
        """
        Build the store row (vector plus dynamic scalar fields).

        Optional fields that are unset are omitted rather than stored as null.
        """
        row: dict[str, Any] = {
            vector_field: self.embedding,
            "content": self.content,
            "filePath": self.file_path,
            "sessionId": self.session_id,
        }
        optional = {
            "startLine": self.start_line,
            "endLine": self.end_line,
            "chunkType": self.chunk_type,
        }
        row.update({key: value for key, value in optional.items() if value is not None})
        return row
