"""
Milvus vector store gateway.

Owns the shared code collection: schema creation, batched inserts, vector
index creation with readiness polling, session-filtered search, and bulk
session deletes. Every pymilvus call is blocking and runs in a worker thread.

All sessions share one collection; the `sessionId == "<id>"` filter is the
only isolation between them.

Dependencies: pymilvus, code_indexer.configs, code_indexer.core.exceptions
System role: Vector store client for indexing and retrieval
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping, Sequence
from numbers import Real
from typing import Any

from pymilvus import CollectionSchema, DataType, FieldSchema, MilvusClient

from code_indexer.boundary.vdb.vector_schemas import (
    SESSION_FIELD,
    IndexState,
    compute_nlist,
    session_filter,
)
from code_indexer.configs import VectorStoreSettings
from code_indexer.core.exceptions import (
    IndexBuildError,
    IndexBuildTimeoutError,
    VectorStoreError,
)
from code_indexer.models.chunk import EmbeddingRecord
from code_indexer.models.search import SearchHit, StoredChunk

logger = logging.getLogger(__name__)

OUTPUT_FIELDS = ["content", "filePath", SESSION_FIELD, "startLine", "endLine", "chunkType"]


class MilvusGateway:
    """
    Gateway to the Milvus collection holding every session's chunks.

    Provides collection/index lifecycle management, batched inserts,
    session-scoped search and session teardown.
    """

    def __init__(
        self,
        client: MilvusClient,
        settings: VectorStoreSettings | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            client: Connected pymilvus client
            settings: Vector store settings (defaults from environment)
            sleep: Awaitable used between index state polls
            clock: Monotonic clock used for the index wait budget
        """
        self._client = client
        self.config = settings or VectorStoreSettings()
        self.collection_name = self.config.collection_name
        self._sleep = sleep
        self._clock = clock
        self._dimensions: dict[str, int] = {}

    async def _call(self, operation: str, fn: Callable[..., Any], **kwargs: Any) -> Any:
        """Run a blocking client call, wrapping any failure as VectorStoreError."""
        try:
            return await asyncio.to_thread(fn, **kwargs)
        except VectorStoreError:
            raise
        except Exception as e:
            logger.error(
                f"{__name__}:{operation} - {type(e).__name__}: {e}",
                extra={"collection": self.collection_name, "operation": operation},
            )
            raise VectorStoreError(
                message=f"Failed to {operation.replace('_', ' ')}: {e}",
                operation=operation,
                details={"collection": self.collection_name, "error": str(e)},
            ) from e

    # ------------------------------------------------------------------
    # Collection lifecycle
    # ------------------------------------------------------------------

    def _build_schema(self, dimension: int) -> CollectionSchema:
        return CollectionSchema(
            fields=[
                FieldSchema(name="id", dtype=DataType.INT64, is_primary=True, auto_id=True),
                FieldSchema(name=self.config.vector_field, dtype=DataType.FLOAT_VECTOR, dim=dimension),
            ],
            description="Code chunk embeddings partitioned by sessionId",
            enable_dynamic_field=True,
        )

    async def _existing_dimension(self, name: str) -> int | None:
        description = await self._call(
            "describe_collection",
            self._client.describe_collection,
            collection_name=name,
        )
        for field in (description or {}).get("fields", []):
            if field.get("name") == self.config.vector_field:
                dim = (field.get("params") or {}).get("dim")
                return int(dim) if dim is not None else None
        return None

    async def has_collection(self, name: str | None = None) -> bool:
        """Whether the collection exists; also serves as a connectivity check."""
        name = name or self.collection_name
        return bool(await self._call("has_collection", self._client.has_collection, collection_name=name))

    async def ensure_collection(self, name: str | None = None, dimension: int | None = None) -> None:
        """
        Create the collection if it does not exist.

        Args:
            name: Collection name (defaults to the configured collection)
            dimension: Vector dimension fixed at creation

        Raises:
            VectorStoreError: Store unreachable, or an existing collection has another dimension
        """
        name = name or self.collection_name
        if dimension is None or dimension < 1:
            raise VectorStoreError("A positive vector dimension is required", operation="create_collection")

        known = self._dimensions.get(name)
        if known is not None:
            if known != dimension:
                raise VectorStoreError(
                    "Collection dimension mismatch",
                    operation="create_collection",
                    details={"collection": name, "expected": known, "requested": dimension},
                )
            return

        exists = await self._call("has_collection", self._client.has_collection, collection_name=name)
        if exists:
            existing = await self._existing_dimension(name)
            if existing is not None and existing != dimension:
                raise VectorStoreError(
                    "Existing collection has an incompatible vector dimension",
                    operation="create_collection",
                    details={"collection": name, "existing": existing, "requested": dimension},
                )
            logger.info(f"Collection '{name}' already exists")
        else:
            logger.info(f"Collection '{name}' not found, creating it (dim={dimension})")
            await self._call(
                "create_collection",
                self._client.create_collection,
                collection_name=name,
                schema=self._build_schema(dimension),
            )
        self._dimensions[name] = dimension

    # ------------------------------------------------------------------
    # Inserts
    # ------------------------------------------------------------------

    async def insert(self, records: Sequence[EmbeddingRecord]) -> int:
        """
        Insert records in sequential batches.

        Args:
            records: Embedding records for one or more sessions

        Returns:
            int: Number of rows inserted

        Raises:
            VectorStoreError: Dimension mismatch or any batch failing
        """
        if not records:
            return 0

        dimension = self._dimensions.get(self.collection_name)
        if dimension is None:
            dimension = await self._existing_dimension(self.collection_name)
        if dimension is not None:
            for record in records:
                if len(record.embedding) != dimension:
                    raise VectorStoreError(
                        "Vector dimension does not match collection",
                        operation="insert",
                        details={
                            "expected": dimension,
                            "actual": len(record.embedding),
                            "file_path": record.file_path,
                        },
                    )

        batch_size = self.config.insert_batch_size
        total_batches = (len(records) + batch_size - 1) // batch_size
        inserted = 0
        for batch_number, start in enumerate(range(0, len(records), batch_size), start=1):
            batch = records[start:start + batch_size]
            result = await self._call(
                "insert",
                self._client.insert,
                collection_name=self.collection_name,
                data=[record.to_row(self.config.vector_field) for record in batch],
            )
            count = result.get("insert_count", len(batch)) if isinstance(result, Mapping) else len(batch)
            inserted += count
            logger.info(f"Inserted batch {batch_number}/{total_batches} ({count} rows)")
        return inserted

    # ------------------------------------------------------------------
    # Index lifecycle
    # ------------------------------------------------------------------

    async def _index_exists(self) -> bool:
        try:
            indexes = await asyncio.to_thread(
                self._client.list_indexes,
                collection_name=self.collection_name,
                field_name=self.config.vector_field,
            )
        except Exception as e:
            logger.warning(f"Error describing index, assuming it does not exist: {e}")
            return False
        return bool(indexes)

    async def get_index_state(self) -> IndexState:
        """Current state of the configured vector index."""
        info = await self._call(
            "describe_index",
            self._client.describe_index,
            collection_name=self.collection_name,
            index_name=self.config.index_name,
        )
        if not info:
            return IndexState.ABSENT
        if "state" in info:
            return IndexState.from_store(info["state"])
        # Older servers omit the state string; derive it from row counters
        return IndexState.FINISHED if info.get("pending_index_rows") == 0 else IndexState.BUILDING

    async def create_index_if_needed(self, total_vector_count: int) -> bool:
        """
        Create the vector index unless one exists, then wait until it is built.

        Args:
            total_vector_count: Vectors just inserted; drives the IVF cluster count

        Returns:
            bool: True once an index is ready

        Raises:
            IndexBuildError: Store reports the build failed
            IndexBuildTimeoutError: Still building after the wait or attempt cap
            VectorStoreError: Store unreachable
        """
        if await self._index_exists():
            logger.info("Index already exists, skipping creation")
            await self._load()
            return True

        nlist = compute_nlist(total_vector_count, self.config.nlist_min, self.config.nlist_max)
        index_params = MilvusClient.prepare_index_params()
        index_params.add_index(
            field_name=self.config.vector_field,
            index_type=self.config.index_type,
            index_name=self.config.index_name,
            metric_type=self.config.metric_type,
            params={"nlist": nlist},
        )

        logger.info(f"Creating index for collection '{self.collection_name}' (nlist={nlist})")
        await self._call(
            "create_index",
            self._client.create_index,
            collection_name=self.collection_name,
            index_params=index_params,
            sync=False,
        )

        await self._wait_for_index()
        await self._load()
        return True

    async def _wait_for_index(self) -> None:
        """Poll index state with a growing interval until finished, failed, or out of budget."""
        started = self._clock()
        interval = self.config.poll_interval_seconds
        attempts = 0

        while True:
            elapsed = self._clock() - started
            if elapsed >= self.config.max_index_wait_seconds or attempts >= self.config.max_poll_attempts:
                logger.error(
                    f"Index build still pending after {elapsed:.0f}s and {attempts} polls",
                    extra={"collection": self.collection_name},
                )
                raise IndexBuildTimeoutError(elapsed, attempts, details={"collection": self.collection_name})

            state = await self.get_index_state()
            attempts += 1
            logger.info(f"Index state: {state.value} ({round(elapsed)}s elapsed, poll {attempts})")

            if state is IndexState.FINISHED:
                logger.info("Index creation completed successfully")
                return
            if state is IndexState.FAILED:
                raise IndexBuildError(
                    "Index creation failed",
                    details={"collection": self.collection_name, "index": self.config.index_name},
                )

            await self._sleep(interval)
            interval = min(interval * self.config.poll_backoff_factor, self.config.max_poll_interval_seconds)

    async def _load(self) -> None:
        await self._call("load_collection", self._client.load_collection, collection_name=self.collection_name)

    # ------------------------------------------------------------------
    # Reads and deletes
    # ------------------------------------------------------------------

    async def search(self, query_vector: list[float], session_id: str, limit: int = 5) -> list[SearchHit]:
        """
        Nearest-neighbour search restricted to one session.

        Args:
            query_vector: Query embedding
            session_id: Session whose chunks may be returned
            limit: Maximum hits

        Returns:
            list[SearchHit]: Hits ranked by similarity

        Raises:
            ValidationError: Empty session id
            VectorStoreError: Search failed
        """
        expr = session_filter(session_id)
        raw = await self._call(
            "search",
            self._client.search,
            collection_name=self.collection_name,
            data=[query_vector],
            anns_field=self.config.vector_field,
            filter=expr,
            limit=limit,
            output_fields=OUTPUT_FIELDS,
            search_params={
                "metric_type": self.config.metric_type,
                "params": {"nprobe": self.config.search_nprobe},
            },
        )

        hits: list[SearchHit] = []
        first = raw[0] if raw else []
        for item in first or []:
            hit = self._parse_hit(item, session_id)
            if hit is not None:
                hits.append(hit)

        hits.sort(key=lambda h: h.score, reverse=True)
        logger.info(
            f"Found {len(hits)} search results",
            extra={"session_id": session_id, "limit": limit},
        )
        return hits

    async def query_session(self, session_id: str, limit: int = 1000) -> list[StoredChunk]:
        """Read back a session's stored chunks without their vectors."""
        expr = session_filter(session_id)
        rows = await self._call(
            "query",
            self._client.query,
            collection_name=self.collection_name,
            filter=expr,
            output_fields=["id", *OUTPUT_FIELDS],
            limit=limit,
        )
        chunks = []
        for row in rows or []:
            fields = _fields(row, session_id)
            if fields is None:
                logger.warning(f"Unexpected query result format: {row!r:.200}")
                continue
            chunks.append(StoredChunk(**fields))
        logger.info(f"Retrieved {len(chunks)} chunks", extra={"session_id": session_id})
        return chunks

    async def delete_session(self, session_id: str) -> int | None:
        """
        Delete every row belonging to a session.

        Returns:
            int | None: Deleted row count when the store reports one
        """
        expr = session_filter(session_id)
        result = await self._call(
            "delete",
            self._client.delete,
            collection_name=self.collection_name,
            filter=expr,
        )
        if isinstance(result, Mapping):
            count = result.get("delete_count")
        elif isinstance(result, (list, tuple)):
            # Milvus Lite returns the deleted primary keys
            count = len(result)
        else:
            count = None
        logger.info(f"Data for session {session_id} deleted", extra={"session_id": session_id, "deleted": count})
        return count

    @staticmethod
    def _parse_hit(item: Any, session_id: str) -> SearchHit | None:
        if not isinstance(item, Mapping):
            logger.warning(f"Unexpected search result format: {item!r:.200}")
            return None
        score = item.get("distance", item.get("score"))
        fields = _fields(item, session_id)
        if fields is None or not isinstance(score, Real) or isinstance(score, bool):
            logger.warning(f"Unexpected search result format: {item!r:.200}")
            return None
        return SearchHit(score=float(score), **fields)


def _fields(item: Any, session_id: str) -> dict[str, Any] | None:
    """
    Extract chunk fields from a store row, or None when the shape is unusable
    or the row belongs to another session.
    """
    if not isinstance(item, Mapping):
        return None
    entity = item.get("entity")
    merged = {**item, **entity} if isinstance(entity, Mapping) else dict(item)

    row_id = merged.get("id")
    content = merged.get("content")
    file_path = merged.get("filePath")
    row_session = merged.get(SESSION_FIELD)
    if not isinstance(row_id, (int, str)) or isinstance(row_id, bool):
        return None
    if not isinstance(content, str) or not isinstance(file_path, str) or not isinstance(row_session, str):
        return None
    if row_session != session_id:
        logger.warning(
            "Dropping row from another session",
            extra={"session_id": session_id, "row_session": row_session},
        )
        return None

    def _int(value: Any) -> int | None:
        return value if isinstance(value, int) and not isinstance(value, bool) else None

    chunk_type = merged.get("chunkType")
    return {
        "id": row_id,
        "content": content,
        "file_path": file_path,
        "session_id": row_session,
        "start_line": _int(merged.get("startLine")),
        "end_line": _int(merged.get("endLine")),
        "chunk_type": chunk_type if isinstance(chunk_type, str) else None,
    }
