"""
Session API endpoints.

Routes:
- GET /sessions/{id}/chunks - List a session's stored chunks
- DELETE /sessions/{id} - Delete a session's indexed data

Dependencies: code_indexer.application.session_service, code_indexer.models
System role: Session data HTTP API
"""

from fastapi import APIRouter, Depends, Query

from code_indexer.api.dependencies import get_session_service
from code_indexer.api.routers.error_handling import handle_indexer_errors
from code_indexer.application.session_service import SessionService
from code_indexer.models.session import ClearSessionResponse, SessionChunksResponse

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get(
    "/{session_id}/chunks",
    response_model=SessionChunksResponse,
    response_model_by_alias=True,
)
@handle_indexer_errors
async def list_session_chunks(
    session_id: str,
    limit: int = Query(default=1000, ge=1, le=16384),
    session_service: SessionService = Depends(get_session_service),
) -> SessionChunksResponse:
    """
    List stored chunks for a session.

    Args:
        session_id: Session identifier
        limit: Maximum number of chunks (default 1000)
    """
    chunks = await session_service.list_chunks(session_id, limit=limit)
    return SessionChunksResponse(session_id=session_id, total=len(chunks), chunks=chunks)


@router.delete("/{session_id}", response_model=ClearSessionResponse, response_model_by_alias=True)
@handle_indexer_errors
async def clear_session(
    session_id: str,
    session_service: SessionService = Depends(get_session_service),
) -> ClearSessionResponse:
    """Delete every chunk indexed for the session."""
    deleted = await session_service.clear_session(session_id)
    return ClearSessionResponse(
        session_id=session_id,
        message="Session data deleted",
        deleted=deleted,
    )
