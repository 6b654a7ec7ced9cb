"""
Search API endpoint.

Routes:
- POST /search - Semantic search over one session's chunks

Dependencies: code_indexer.application.retrieval_service, code_indexer.models
System role: Code retrieval HTTP API
"""

from fastapi import APIRouter, Depends

from code_indexer.api.dependencies import get_retrieval_service
from code_indexer.api.routers.error_handling import handle_indexer_errors
from code_indexer.application.retrieval_service import RetrievalService
from code_indexer.models.search import SearchRequest, SearchResponse, SearchResultItem

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=SearchResponse, response_model_by_alias=True)
@handle_indexer_errors
async def search_code(
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """Embed the query and return the session's nearest chunks, best first."""
    hits = await retrieval_service.search(
        request.session_id,
        request.query_text,
        limit=request.limit,
    )
    return SearchResponse(
        message=f"Found {len(hits)} results",
        results=[SearchResultItem.from_hit(hit) for hit in hits],
    )
