"""
Dependency injection container.

Factory functions for FastAPI dependencies. Clients are created lazily on
first use so the app starts without a reachable vector store.

Dependencies: code_indexer.configs, code_indexer.application, code_indexer.boundary
System role: DI container for service injection
"""

from code_indexer.api.errors import IndexingUnavailableError, to_http_exception
from code_indexer.application import (
    IndexingService,
    RetrievalService,
    SessionService,
    indexing_failure_response,
)
from code_indexer.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._gateway = None
        self._embedding_client = None
        self._orchestrator = None

    @property
    def settings(self) -> Settings:
        return get_settings()

    @property
    def gateway(self):
        """Get cached Milvus gateway."""
        if self._gateway is None:
            from code_indexer.boundary.vdb import get_vector_store_gateway
            self._gateway = get_vector_store_gateway(self.settings.vector_store)
        return self._gateway

    @property
    def embedding_client(self):
        """Get cached embedding client."""
        if self._embedding_client is None:
            from code_indexer.boundary.embeddings import get_embedding_client
            self._embedding_client = get_embedding_client(self.settings.embedding)
        return self._embedding_client

    @property
    def orchestrator(self):
        """Get cached indexing orchestrator."""
        if self._orchestrator is None:
            from code_indexer.core.chunking import CodeChunker
            from code_indexer.core.indexing import IndexingOrchestrator

            settings = self.settings
            self._orchestrator = IndexingOrchestrator(
                chunker=CodeChunker(
                    chunk_size=settings.indexing.chunk_size,
                    chunk_overlap=settings.indexing.chunk_overlap,
                ),
                embedding_client=self.embedding_client,
                gateway=self.gateway,
                indexing_settings=settings.indexing,
                embedding_settings=settings.embedding,
                collection_dimension=settings.embedding.dimension,
            )
        return self._orchestrator

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gateway = None
        self._embedding_client = None
        self._orchestrator = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_indexing_service() -> IndexingService:
    """
    Indexing service; error detail is exposed only in development.

    Raises:
        IndexingUnavailableError: Embedding or vector store client could not be built
    """
    cache = get_service_cache()
    expose_errors = cache.settings.is_development
    try:
        orchestrator = cache.orchestrator
    except Exception as e:
        raise IndexingUnavailableError(indexing_failure_response(e, expose_errors)) from e
    return IndexingService(orchestrator, expose_errors=expose_errors)


def get_retrieval_service() -> RetrievalService:
    """
    Retrieval service.

    Raises:
        HTTPException: Client construction failed (503 for the vector store)
    """
    cache = get_service_cache()
    try:
        embedding_client = cache.embedding_client
        gateway = cache.gateway
    except Exception as e:
        raise to_http_exception(e) from e
    return RetrievalService(
        embedding_client,
        gateway,
        default_limit=cache.settings.vector_store.default_search_limit,
    )


def get_session_service() -> SessionService:
    try:
        gateway = get_service_cache().gateway
    except Exception as e:
        raise to_http_exception(e) from e
    return SessionService(gateway)
