"""
Vector store factory.

Builds the Milvus gateway from VECTOR_STORE_* settings. Works against a local
Milvus server (http://localhost:19530) or a Zilliz Cloud endpoint with token.

Dependencies: pymilvus, code_indexer.configs
System role: Vector store instantiation
"""

import logging

from pymilvus import MilvusClient

from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.configs import VectorStoreSettings, get_settings
from code_indexer.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def get_vector_store_gateway(settings: VectorStoreSettings | None = None) -> MilvusGateway:
    """
    Connect to Milvus and wrap the client in a gateway.

    Raises:
        VectorStoreError: If the connection cannot be established
    """
    settings = settings or get_settings().vector_store
    logger.info(f"{__name__}:get_vector_store_gateway - Connecting to Milvus at {settings.uri}")
    try:
        client = MilvusClient(uri=settings.uri, token=settings.token)
    except Exception as e:
        raise VectorStoreError(
            f"Failed to connect to vector store: {e}",
            operation="connect",
            details={"uri": settings.uri},
        ) from e
    return MilvusGateway(client=client, settings=settings)
