"""
Shared test fixtures and configuration for entire test suite.

Provides: Fake embeddings backend, mocked Milvus client, gateway with a
controllable clock, sample file trees
Dependencies: pytest, langchain_core
System role: Test infrastructure and fixture management
"""

from unittest.mock import MagicMock

import pytest
from langchain_core.embeddings import Embeddings

from code_indexer.boundary.vdb.milvus_gateway import MilvusGateway
from code_indexer.configs import EmbeddingSettings, IndexingSettings, VectorStoreSettings
from code_indexer.models.file_node import FileNode


class FakeEmbeddings(Embeddings):
    """Deterministic 3-dimensional embeddings."""

    def __init__(self) -> None:
        self.documents: list[str] = []
        self.queries: list[str] = []

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        self.documents.extend(texts)
        return [[float(len(text)), 1.0, 0.5] for text in texts]

    def embed_query(self, text: str) -> list[float]:
        self.queries.append(text)
        return [1.0, 0.0, 0.0]


class FakeClock:
    """Monotonic clock advanced only by the recorded sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_embeddings() -> FakeEmbeddings:
    """Provide fake LangChain embeddings backend."""
    return FakeEmbeddings()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide fake clock whose sleep advances time instantly."""
    return FakeClock()


@pytest.fixture
def vector_store_settings() -> VectorStoreSettings:
    """Provide vector store settings with library defaults."""
    return VectorStoreSettings()


@pytest.fixture
def indexing_settings() -> IndexingSettings:
    return IndexingSettings(max_concurrent_files=2, max_concurrent_embeddings=3)


@pytest.fixture
def embedding_settings() -> EmbeddingSettings:
    """Retry once with no backoff so tests stay fast."""
    return EmbeddingSettings(
        max_attempts=2,
        retry_initial_wait_seconds=0,
        retry_max_wait_seconds=0,
    )


@pytest.fixture
def mock_milvus_client() -> MagicMock:
    """
    Provide mocked pymilvus client.

    Defaults describe an empty store: no collection and no index.
    """
    client = MagicMock()
    client.has_collection.return_value = False
    client.describe_collection.return_value = {"fields": []}
    client.list_indexes.return_value = []
    client.describe_index.return_value = {"state": "Finished"}
    client.insert.side_effect = lambda collection_name, data: {"insert_count": len(data)}
    client.search.return_value = [[]]
    client.query.return_value = []
    client.delete.return_value = {"delete_count": 0}
    return client


@pytest.fixture
def gateway(mock_milvus_client, vector_store_settings, fake_clock) -> MilvusGateway:
    """Provide gateway wired to the mocked client and fake clock."""
    return MilvusGateway(
        client=mock_milvus_client,
        settings=vector_store_settings,
        sleep=fake_clock.sleep,
        clock=fake_clock,
    )


@pytest.fixture
def sample_files() -> list[FileNode]:
    """Provide a small upload with one nested directory."""
    return [
        FileNode(
            name="app.py",
            path="src/app.py",
            extension=".py",
            content="def main():\n    return 0\n",
        ),
        FileNode(
            name="lib",
            path="src/lib",
            type="directory",
            children=[
                FileNode(
                    name="util.ts",
                    path="src/lib/util.ts",
                    content="export function add(a: number, b: number) {\n  return a + b;\n}\n",
                ),
            ],
        ),
    ]
