"""
Indexing API endpoint.

Routes:
- POST /index - Chunk, embed and store a session's codebase

Dependencies: code_indexer.application.indexing_service, code_indexer.models
System role: Codebase indexing HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from code_indexer.api.dependencies import get_indexing_service
from code_indexer.api.routers.error_handling import handle_indexer_errors
from code_indexer.application.indexing_service import IndexingService
from code_indexer.models.indexing import IndexFailureResponse, IndexRequest, IndexResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/index", tags=["index"])


@router.post(
    "",
    response_model=IndexResponse,
    response_model_by_alias=True,
    responses={
        400: {"model": IndexFailureResponse},
        500: {"model": IndexFailureResponse},
    },
)
@handle_indexer_errors
async def index_codebase(
    request: IndexRequest,
    indexing_service: IndexingService = Depends(get_indexing_service),
):
    """
    Index a session's code files.

    Returns:
        IndexResponse with chunk count and timings

    Raises:
        HTTPException(400): Empty session id
    """
    result = await indexing_service.index(request.session_id, request.code_files)

    if isinstance(result, IndexFailureResponse):
        code = (
            status.HTTP_400_BAD_REQUEST
            if result.no_embeddings
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        return JSONResponse(
            status_code=code,
            content=result.model_dump(by_alias=True, exclude_none=True),
        )

    return result
