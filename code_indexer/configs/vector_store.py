"""
Vector store configuration settings.

Manages the Milvus connection, collection layout, insert batching and the
index build polling schedule.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for indexing and retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

COLLECTION_NAME = "code_embeddings"
VECTOR_FIELD = "embedding"
INDEX_NAME = "embedding_index"

INSERT_BATCH_SIZE = 1000
NLIST_MIN = 4
NLIST_MAX = 128

MAX_INDEX_WAIT_SECONDS = 10 * 60
POLL_INTERVAL_SECONDS = 2.0
POLL_BACKOFF_FACTOR = 1.2
MAX_POLL_INTERVAL_SECONDS = 10.0
MAX_POLL_ATTEMPTS = 30


class VectorStoreSettings(BaseSettings):
    """Milvus / Zilliz Cloud configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    uri: str = Field(
        default="http://localhost:19530",
        description="Milvus server URI (Zilliz Cloud endpoint in production)",
    )
    token: str = Field(default="", description="Milvus auth token (user:password or API key)")

    collection_name: str = Field(default=COLLECTION_NAME, description="Shared collection for all sessions")
    vector_field: str = Field(default=VECTOR_FIELD, description="Vector field name")
    index_name: str = Field(default=INDEX_NAME, description="Vector index name")
    index_type: str = Field(default="IVF_FLAT", description="Milvus index type")
    metric_type: str = Field(default="COSINE", description="Similarity metric")
    search_nprobe: int = Field(default=16, ge=1, description="IVF clusters probed per search")

    insert_batch_size: int = Field(
        default=INSERT_BATCH_SIZE,
        ge=1,
        description="Maximum rows per insert request",
    )
    nlist_min: int = Field(default=NLIST_MIN, ge=1, description="Lower bound for IVF nlist")
    nlist_max: int = Field(default=NLIST_MAX, ge=1, description="Upper bound for IVF nlist")

    # Index build polling
    max_index_wait_seconds: float = Field(
        default=MAX_INDEX_WAIT_SECONDS,
        gt=0,
        description="Wall-clock budget for an index build",
    )
    poll_interval_seconds: float = Field(
        default=POLL_INTERVAL_SECONDS,
        gt=0,
        description="Initial delay between index state polls",
    )
    poll_backoff_factor: float = Field(
        default=POLL_BACKOFF_FACTOR,
        ge=1.0,
        description="Multiplier applied to the poll delay after every poll",
    )
    max_poll_interval_seconds: float = Field(
        default=MAX_POLL_INTERVAL_SECONDS,
        gt=0,
        description="Cap on the poll delay",
    )
    max_poll_attempts: int = Field(
        default=MAX_POLL_ATTEMPTS,
        ge=1,
        description="Maximum number of index state polls",
    )

    default_search_limit: int = Field(default=5, ge=1, le=100, description="Default top-k")
