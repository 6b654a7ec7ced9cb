"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: code_indexer.api.dependencies
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from code_indexer.api.dependencies import ServiceCache, get_service_cache
from code_indexer.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=HealthResponse)
async def health_check_vector_store(
    cache: ServiceCache = Depends(get_service_cache),
) -> HealthResponse:
    """Vector store health check."""
    try:
        exists = await cache.gateway.has_collection()
    except VectorStoreError as e:
        logger.warning(f"Vector store health check failed: {e}")
        raise HTTPException(status_code=503, detail=e.message)

    message = "Vector store accessible" if exists else "Vector store accessible, collection not created"
    return HealthResponse(status="healthy", message=message)
