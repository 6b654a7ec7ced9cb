"""
Observability module.

Provides logging configuration and structured logging helpers.
"""

from code_indexer.observability.log_utils import log_exception_with_context, safe_log_value
from code_indexer.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "safe_log_value",
]
