"""
Vector database boundary layer.

- MilvusGateway: collection/index lifecycle, inserts, session-scoped search
- get_vector_store_gateway: connection factory

Dependencies: pymilvus
System role: Vector store adapter for indexing and retrieval
"""

from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.boundary.vdb.vector_schemas import IndexState, compute_nlist, session_filter
from code_indexer.boundary.vdb.vector_store_factory import get_vector_store_gateway

__all__ = [
    "IndexState",
    "MilvusGateway",
    "compute_nlist",
    "get_vector_store_gateway",
    "session_filter",
]
