"""
Embedding backend factory for selecting between Gemini and Bedrock Titan.

Depends on EMBEDDING_PROVIDER environment variable.

Dependencies: langchain_google_genai, langchain_aws, code_indexer.configs
System role: Embedding client instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings

from code_indexer.boundary.embeddings.embedding_client import EmbeddingClient
from code_indexer.configs import EmbeddingSettings, get_settings

logger = logging.getLogger(__name__)


def build_embeddings(settings: EmbeddingSettings) -> Embeddings:
    """
    Build the LangChain embeddings backend named by settings.provider.

    Raises:
        ValueError: If the provider is unknown
    """
    provider = settings.provider.lower()

    if provider == "google":
        from langchain_google_genai import GoogleGenerativeAIEmbeddings

        logger.info(f"{__name__}:build_embeddings - Creating Gemini embeddings model={settings.model}")
        # The collection schema fixes the dimension; every call must request it
        return GoogleGenerativeAIEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
        )

    if provider == "bedrock":
        from langchain_aws import BedrockEmbeddings

        logger.info(f"{__name__}:build_embeddings - Creating Bedrock embeddings model={settings.model}")
        return BedrockEmbeddings(
            model_id=settings.model,
            region_name=settings.region,
            model_kwargs={"dimensions": settings.dimension},
        )

    raise ValueError(
        f"Invalid EMBEDDING_PROVIDER: {settings.provider}. Must be 'google' or 'bedrock'."
    )


def get_embedding_client(settings: EmbeddingSettings | None = None) -> EmbeddingClient:
    """Build an EmbeddingClient that enforces the configured dimension."""
    settings = settings or get_settings().embedding
    return EmbeddingClient(build_embeddings(settings), dimension=settings.dimension)
