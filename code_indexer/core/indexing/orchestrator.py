"""
Indexing orchestrator.

Drives one session's ingest: files fan out through one bounded runner, each
file's chunks fan out through a second, independently sized runner, and the
flattened records are inserted and indexed in the vector store.

Chunk and embedding failures only shrink the yield. Vector store failures
abort the run; rows already inserted stay in the store.

Dependencies: tenacity, code_indexer.core, code_indexer.boundary
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from collections.abc import Sequence

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from code_indexer.boundary.embeddings.embedding_client import EmbeddingClient
from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.configs import EmbeddingSettings, IndexingSettings
from code_indexer.core.chunking.code_chunker import CodeChunker
from code_indexer.core.concurrency import BoundedConcurrencyRunner
from code_indexer.core.exceptions import ChunkingError, EmbeddingError, ValidationError
from code_indexer.models.chunk import Chunk, EmbeddingRecord
from code_indexer.models.file_node import FileNode
from code_indexer.models.indexing import IndexingResult, IndexOutcome
from code_indexer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class IndexingOrchestrator:
    """Orchestrate chunk -> embed -> insert -> index for one session."""

    def __init__(
        self,
        chunker: CodeChunker,
        embedding_client: EmbeddingClient,
        gateway: MilvusGateway,
        indexing_settings: IndexingSettings | None = None,
        embedding_settings: EmbeddingSettings | None = None,
        collection_dimension: int | None = None,
    ) -> None:
        """
        Args:
            chunker: Source chunker
            embedding_client: Single-text embedding client
            gateway: Vector store gateway
            indexing_settings: Concurrency ceilings (defaults from environment)
            embedding_settings: Per-chunk retry policy (defaults from environment)
            collection_dimension: Vector dimension for a new collection;
                None uses the length of the first produced vector
        """
        self._chunker = chunker
        self._embedding_client = embedding_client
        self._gateway = gateway
        self._indexing = indexing_settings or IndexingSettings()
        self._embedding = embedding_settings or EmbeddingSettings()
        self._collection_dimension = collection_dimension

        self._file_runner: BoundedConcurrencyRunner[FileNode, list[EmbeddingRecord]] = (
            BoundedConcurrencyRunner(self._indexing.max_concurrent_files, name="files")
        )
        self._chunk_runner: BoundedConcurrencyRunner[Chunk, EmbeddingRecord] = (
            BoundedConcurrencyRunner(self._indexing.max_concurrent_embeddings, name="embeddings")
        )

    async def index_session(self, session_id: str, files: Sequence[FileNode]) -> IndexingResult:
        """
        Index every file of an upload into the session's partition.

        Args:
            session_id: Session owning the records
            files: Uploaded files (directory nodes are flattened)

        Returns:
            IndexingResult: INDEXED with counts, or NO_EMBEDDINGS when nothing
            could be embedded (no store call is made in that case)

        Raises:
            ValidationError: Empty session id
            VectorStoreError: Collection, insert or index step failed
        """
        if not session_id or not session_id.strip():
            raise ValidationError("session_id is required", field="session_id")

        start = time.perf_counter()
        code_files = [leaf for node in files for leaf in node.iter_files()]
        logger.info(f"Processing {len(code_files)} code files", extra={"session_id": session_id})

        per_file = await self._file_runner.run(
            code_files,
            lambda file: self.process_file(file, session_id),
            describe=lambda file: file.path,
        )
        records = [record for file_records in per_file for record in file_records]
        processing_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"Generated {len(records)} embeddings in {processing_ms:.0f}ms",
            extra={"session_id": session_id},
        )

        if not records:
            logger.warning("No embeddings could be generated", extra={"session_id": session_id})
            return IndexingResult(
                outcome=IndexOutcome.NO_EMBEDDINGS,
                session_id=session_id,
                files_processed=len(code_files),
                processing_time_ms=processing_ms,
            )

        store_start = time.perf_counter()
        dimension = self._collection_dimension or len(records[0].embedding)
        await self._gateway.ensure_collection(dimension=dimension)
        inserted = await self._gateway.insert(records)
        logger.info(f"Embeddings inserted in {(time.perf_counter() - store_start) * 1000:.0f}ms")
        await self._gateway.create_index_if_needed(len(records))
        indexing_ms = (time.perf_counter() - store_start) * 1000

        logger.info(
            f"Indexing process completed in {processing_ms + indexing_ms:.0f}ms",
            extra={"session_id": session_id, "inserted": inserted},
        )
        return IndexingResult(
            outcome=IndexOutcome.INDEXED,
            session_id=session_id,
            inserted_count=inserted,
            files_processed=len(code_files),
            processing_time_ms=processing_ms,
            indexing_time_ms=indexing_ms,
        )

    async def process_file(self, file: FileNode, session_id: str) -> list[EmbeddingRecord]:
        """Chunk one file and embed its chunks; failed chunks are dropped."""
        try:
            chunks = self._chunker.generate_chunks(file.content or "", file.resolved_extension)
        except ChunkingError as e:
            log_exception_with_context(logger, f"Could not chunk file {file.path}", e, file_path=file.path)
            return []

        logger.info(f"Generated {len(chunks)} chunks for {file.path}")
        if not chunks:
            return []

        records = await self._chunk_runner.run(
            chunks,
            lambda chunk: self._embed_chunk(chunk, file.path, session_id),
            describe=lambda chunk: f"chunk in {file.path} (line {chunk.start_line})",
        )
        logger.info(f"Processed {len(records)}/{len(chunks)} chunks for {file.path}")
        return records

    async def _embed_chunk(self, chunk: Chunk, file_path: str, session_id: str) -> EmbeddingRecord:
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(EmbeddingError),
            stop=stop_after_attempt(self._embedding.max_attempts),
            wait=wait_exponential_jitter(
                initial=self._embedding.retry_initial_wait_seconds,
                max=self._embedding.retry_max_wait_seconds,
                jitter=self._embedding.retry_initial_wait_seconds,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"Retrying embedding for chunk in {file_path} "
                f"(attempt {retry_state.attempt_number}/{self._embedding.max_attempts})"
            ),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                vector = await self._embedding_client.embed(chunk.content)
        return EmbeddingRecord.from_chunk(chunk, vector, file_path=file_path, session_id=session_id)
