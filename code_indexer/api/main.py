"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, code_indexer.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from code_indexer import __version__
from code_indexer.api.dependencies import get_service_cache
from code_indexer.api.errors import IndexingUnavailableError, indexing_unavailable_handler
from code_indexer.configs import get_settings
from code_indexer.observability import configure_logging

from .routers import health_router, index_router, search_router, sessions_router

load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and drops cached clients on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")
    logger.info(
        f"Code indexer starting (environment={settings.environment}, "
        f"collection={settings.vector_store.collection_name})"
    )

    yield

    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Code Indexer API",
        description="Session-scoped codebase indexing and semantic code search",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(IndexingUnavailableError, indexing_unavailable_handler)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(index_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")
    app.include_router(sessions_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "code_indexer.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
