"""
Embedding client.

One text in, one vector out. Wraps any LangChain `Embeddings` implementation
and runs its blocking SDK call in a worker thread. Does not retry; retry
policy belongs to the caller.

Dependencies: langchain_core, asyncio
System role: Embedding generation adapter
"""

import asyncio
import logging
from collections.abc import Callable
from numbers import Real

from langchain_core.embeddings import Embeddings

from code_indexer.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingClient:
    """Single-text embedding calls with payload validation."""

    def __init__(self, embeddings: Embeddings, dimension: int | None = None) -> None:
        """
        Args:
            embeddings: LangChain embeddings backend
            dimension: Expected vector length; None skips the length check
        """
        self._embeddings = embeddings
        self.dimension = dimension

    async def embed(self, text: str) -> list[float]:
        """
        Embed a document chunk.

        Raises:
            EmbeddingError: Empty input, transport failure or unusable payload
        """
        vectors = await self._call(self._embeddings.embed_documents, [text], text=text, kind="document")
        if not isinstance(vectors, list) or not vectors:
            raise EmbeddingError(
                "Embedding service returned no vectors",
                details={"text_length": len(text)},
            )
        return self._validate(vectors[0])

    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a search query.

        Raises:
            EmbeddingError: Empty input, transport failure or unusable payload
        """
        vector = await self._call(self._embeddings.embed_query, text, text=text, kind="query")
        return self._validate(vector)

    async def _call(self, fn: Callable, arg, *, text: str, kind: str):
        if not text or not text.strip():
            raise EmbeddingError(f"Cannot embed empty {kind} text")
        try:
            return await asyncio.to_thread(fn, arg)
        except Exception as e:
            raise EmbeddingError(
                f"Failed to generate {kind} embedding: {e}",
                details={"text_length": len(text), "error_type": type(e).__name__},
            ) from e

    def _validate(self, vector) -> list[float]:
        if not isinstance(vector, (list, tuple)) or not vector:
            raise EmbeddingError("Embedding service returned an empty vector")
        if not all(isinstance(value, Real) and not isinstance(value, bool) for value in vector):
            raise EmbeddingError("Embedding vector contains non-numeric values")
        if self.dimension is not None and len(vector) != self.dimension:
            raise EmbeddingError(
                "Embedding dimension mismatch",
                details={"expected": self.dimension, "actual": len(vector)},
            )
        return [float(value) for value in vector]
