"""
HTTP error mapping.

Translates domain exceptions to HTTP responses. Used by the route decorator
and by dependency functions, which run before the route body and so outside
the decorator.

Dependencies: fastapi, code_indexer.core.exceptions, code_indexer.models
System role: Exception to status-code mapping for the API
"""

import logging

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from code_indexer.core.exceptions import EmbeddingError, ValidationError, VectorStoreError
from code_indexer.models.indexing import IndexFailureResponse

logger = logging.getLogger(__name__)


def to_http_exception(exc: Exception) -> HTTPException:
    """
    Map an exception to an HTTPException.

    - ValidationError -> 400
    - EmbeddingError -> 502 (embedding provider failed)
    - VectorStoreError -> 503 (vector store unavailable)
    - anything else -> 500
    """
    if isinstance(exc, HTTPException):
        return exc

    if isinstance(exc, ValidationError):
        logger.warning("Invalid request", extra={"error": str(exc)})
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)

    if isinstance(exc, EmbeddingError):
        logger.error("Embedding provider failure", extra={"error": str(exc)})
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to embed query: {exc.message}",
        )

    if isinstance(exc, VectorStoreError):
        logger.error("Vector store failure", extra={"error": str(exc)})
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.message)

    logger.error(f"Unexpected failure: {type(exc).__name__}: {exc}", exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An internal error occurred",
    )


class IndexingUnavailableError(Exception):
    """Indexing could not start; carries the failure payload to return."""

    def __init__(self, payload: IndexFailureResponse) -> None:
        self.payload = payload
        super().__init__(payload.message)


async def indexing_unavailable_handler(request: Request, exc: IndexingUnavailableError) -> JSONResponse:
    """Render the structured indexing failure payload as a 500."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=exc.payload.model_dump(by_alias=True, exclude_none=True),
    )
