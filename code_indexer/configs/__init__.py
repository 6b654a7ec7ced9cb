"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from code_indexer.configs.embedding import EmbeddingSettings
from code_indexer.configs.indexing import IndexingSettings
from code_indexer.configs.settings import Settings, get_settings
from code_indexer.configs.vector_store import VectorStoreSettings

__all__ = [
    "EmbeddingSettings",
    "IndexingSettings",
    "Settings",
    "VectorStoreSettings",
    "get_settings",
]
