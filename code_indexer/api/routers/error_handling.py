"""
Router error handling utilities.

Decorator mapping domain exceptions to HTTP status codes for consistent error
responses across endpoints.
"""

import functools
from typing import Any, Callable, TypeVar

from fastapi import HTTPException

from code_indexer.api.errors import to_http_exception

F = TypeVar("F", bound=Callable[..., Any])


def handle_indexer_errors(func: F) -> F:
    """Decorator to transform domain errors into HTTPExceptions (see to_http_exception)."""
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as e:
            raise to_http_exception(e) from e

    return wrapper  # type: ignore
