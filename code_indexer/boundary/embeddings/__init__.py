"""
Embedding boundary layer.

- EmbeddingClient: single-text embedding with payload validation
- get_embedding_client: provider selection from settings
"""

from code_indexer.boundary.embeddings.embedding_client import EmbeddingClient
from code_indexer.boundary.embeddings.embedding_factory import build_embeddings, get_embedding_client

__all__ = ["EmbeddingClient", "build_embeddings", "get_embedding_client"]
