"""
Indexing service.

Runs the orchestrator and turns its outcome (or failure) into the structured
payloads returned to callers. Exception detail is only attached in
development.

Dependencies: code_indexer.core.indexing, code_indexer.models
System role: Indexing request handling
"""

import logging
from collections.abc import Sequence

from code_indexer.core.exceptions import CodeIndexerError, ValidationError
from code_indexer.core.indexing.orchestrator import IndexingOrchestrator
from code_indexer.models.file_node import FileNode
from code_indexer.models.indexing import (
    IndexFailureResponse,
    IndexOutcome,
    IndexResponse,
)

logger = logging.getLogger(__name__)


class IndexingService:
    """Map indexing runs to success or failure payloads."""

    def __init__(self, orchestrator: IndexingOrchestrator, expose_errors: bool = False) -> None:
        """
        Args:
            orchestrator: Indexing orchestrator
            expose_errors: Attach exception detail to failure payloads
        """
        self._orchestrator = orchestrator
        self.expose_errors = expose_errors

    async def index(
        self,
        session_id: str,
        files: Sequence[FileNode],
    ) -> IndexResponse | IndexFailureResponse:
        """
        Index a session's files.

        Returns:
            IndexResponse on success, IndexFailureResponse when nothing could be
            embedded or a store step failed
        """
        try:
            result = await self._orchestrator.index_session(session_id, files)
        except ValidationError:
            raise
        except Exception as e:
            return indexing_failure_response(e, self.expose_errors, session_id=session_id)

        if result.outcome is IndexOutcome.NO_EMBEDDINGS:
            return IndexFailureResponse(
                message="No embeddings could be generated",
                details="Check file contents and embedding generation",
                processing_time=round(result.processing_time_ms, 2),
                no_embeddings=True,
            )

        return IndexResponse(
            total_chunks=result.inserted_count,
            processing_time=round(result.processing_time_ms, 2),
            indexing_time=round(result.indexing_time_ms, 2),
        )


def indexing_failure_response(
    exc: Exception,
    expose_errors: bool = False,
    session_id: str | None = None,
) -> IndexFailureResponse:
    """
    Build the failure payload for an exception raised while indexing.

    Domain errors keep their message; anything else gets a generic one.
    Exception detail is attached only when expose_errors is set.
    """
    detail = f"{type(exc).__name__}: {exc}" if expose_errors else None
    if isinstance(exc, CodeIndexerError):
        logger.error(f"Indexing failed: {exc}", extra={"session_id": session_id})
        return IndexFailureResponse(message=exc.message, error=detail)

    logger.error(
        f"Unexpected indexing error: {type(exc).__name__}: {exc}",
        exc_info=exc,
        extra={"session_id": session_id},
    )
    return IndexFailureResponse(
        message="An unexpected error occurred during indexing.",
        error=detail,
    )
