"""
Codebase indexing and retrieval.

Chunks uploaded source files, embeds each chunk and stores the vectors in a
session-partitioned Milvus collection for nearest-neighbour search.
"""

__version__ = "0.1.0"
