"""
Exception hierarchy for the code indexer.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Per-item failures (ChunkingError, EmbeddingError) are recovered by the
indexing orchestrator; VectorStoreError and its subclasses abort the call.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CodeIndexerError(Exception):
    """Base exception for all code indexer errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(CodeIndexerError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ChunkingError(CodeIndexerError):
    """Raised when a file cannot be split into chunks."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_path:
            details["file_path"] = file_path
        super().__init__(message, details)


class EmbeddingError(CodeIndexerError):
    """Raised when embedding generation fails or returns an unusable payload."""

    pass


class VectorStoreError(CodeIndexerError):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (insert, search, create_index, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class IndexBuildError(VectorStoreError):
    """Raised when the store reports that an index build failed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, operation="create_index", details=details)


class IndexBuildTimeoutError(VectorStoreError):
    """Raised when an index is still building after the wait or attempt cap."""

    def __init__(
        self,
        elapsed_seconds: float,
        attempts: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details.update({"elapsed_seconds": round(elapsed_seconds, 2), "attempts": attempts})
        self.elapsed_seconds = elapsed_seconds
        self.attempts = attempts
        super().__init__(
            f"Index creation timed out after {elapsed_seconds:.0f} seconds "
            f"or {attempts} poll attempts",
            operation="create_index",
            details=details,
        )
