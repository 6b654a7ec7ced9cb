"""
Indexing pipeline configuration settings.

Concurrency ceilings are nested: every file in flight fans out again at the
chunk level, so peak embedding calls are files x embeddings.

Dependencies: pydantic, pydantic_settings
System role: Chunking and fan-out configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_CONCURRENT_FILES = 5
MAX_CONCURRENT_EMBEDDINGS = 10


class IndexingSettings(BaseSettings):
    """Settings for the indexing orchestrator and chunker."""

    model_config = SettingsConfigDict(
        env_prefix="INDEXING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_concurrent_files: int = Field(
        default=MAX_CONCURRENT_FILES,
        ge=1,
        description="Files processed concurrently",
    )
    max_concurrent_embeddings: int = Field(
        default=MAX_CONCURRENT_EMBEDDINGS,
        ge=1,
        description="Chunk embeddings in flight per file",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1500,
        ge=1,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=150,
        ge=0,
        description="Overlap between consecutive chunks",
    )
