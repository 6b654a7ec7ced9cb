"""
Bounded concurrency runner.

Processes items through an async operation one batch at a time. Every
operation in a batch is started together and the batch is awaited until all
of them settle, so at most `max_concurrency` operations are ever in flight and
a failing item never cancels or delays its siblings.

Dependencies: asyncio
System role: Admission control for embedding and file fan-out
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from code_indexer.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BoundedConcurrencyRunner(Generic[T, R]):
    """Batch-at-a-time async fan-out with per-item failure isolation."""

    def __init__(self, max_concurrency: int, name: str = "runner") -> None:
        """
        Args:
            max_concurrency: Batch size, i.e. the peak number of in-flight operations
            name: Label used in log records

        Raises:
            ValueError: When max_concurrency < 1
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency
        self.name = name

    async def run(
        self,
        items: Sequence[T],
        operation: Callable[[T], Awaitable[R]],
        describe: Callable[[T], str] | None = None,
    ) -> list[R]:
        """
        Run `operation` over `items` and collect the successful results.

        Args:
            items: Items to process
            operation: Async callable applied to each item
            describe: Renders an item for failure logs (defaults to repr)

        Returns:
            list[R]: Results of the operations that succeeded
        """
        results: list[R] = []
        failures = 0

        for start in range(0, len(items), self.max_concurrency):
            batch = items[start:start + self.max_concurrency]
            outcomes = await asyncio.gather(
                *(operation(item) for item in batch),
                return_exceptions=True,
            )

            for item, outcome in zip(batch, outcomes):
                if isinstance(outcome, Exception):
                    failures += 1
                    log_exception_with_context(
                        logger,
                        f"{self.name}: processing failed for {describe(item) if describe else repr(item)}",
                        outcome,
                        runner=self.name,
                    )
                elif isinstance(outcome, BaseException):
                    # Cancellation and interpreter exits are not item failures
                    raise outcome
                else:
                    results.append(outcome)

        if failures:
            logger.warning(
                f"{self.name}: {failures}/{len(items)} items failed",
                extra={"runner": self.name, "failed": failures, "total": len(items)},
            )
        return results
