"""Session indexing orchestration."""

from code_indexer.core.indexing.orchestrator import IndexingOrchestrator

__all__ = ["IndexingOrchestrator"]
