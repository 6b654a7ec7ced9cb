"""Source chunking."""

from code_indexer.core.chunking.code_chunker import EXTENSION_LANGUAGES, CodeChunker

__all__ = ["CodeChunker", "EXTENSION_LANGUAGES"]
