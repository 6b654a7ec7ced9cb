"""Application services."""

from code_indexer.application.indexing_service import IndexingService, indexing_failure_response
from code_indexer.application.retrieval_service import RetrievalService
from code_indexer.application.session_service import SessionService

__all__ = ["IndexingService", "RetrievalService", "SessionService", "indexing_failure_response"]
