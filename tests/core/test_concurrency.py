"""
Test suite for BoundedConcurrencyRunner.

System role: Verification of batch-at-a-time admission control
"""

import asyncio

import pytest

from code_indexer.core.concurrency import BoundedConcurrencyRunner


class InFlightTracker:
    """Records peak concurrency and start/end ordering."""

    def __init__(self) -> None:
        self.in_flight = 0
        self.peak = 0
        self.events: list[tuple[str, int]] = []

    async def op(self, item: int) -> int:
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        self.events.append(("start", item))
        # Later items finish first so ordering does not depend on start order
        await asyncio.sleep(0.001 * (10 - item % 10))
        self.events.append(("end", item))
        self.in_flight -= 1
        return item * 10


class TestBoundedConcurrencyRunnerInit:
    """Test suite for runner construction."""

    @pytest.mark.parametrize("ceiling", [0, -1])
    def test_rejects_non_positive_ceiling(self, ceiling: int) -> None:
        with pytest.raises(ValueError):
            BoundedConcurrencyRunner(ceiling)

    def test_ceiling_of_one_is_allowed(self) -> None:
        runner = BoundedConcurrencyRunner(1, name="serial")
        assert runner.max_concurrency == 1
        assert runner.name == "serial"


class TestBoundedConcurrencyRunnerRun:
    """Test suite for run()."""

    @pytest.mark.asyncio
    async def test_empty_input_returns_empty_list(self) -> None:
        runner = BoundedConcurrencyRunner(5)

        async def op(item):
            raise AssertionError("operation must not be called")

        assert await runner.run([], op) == []

    @pytest.mark.asyncio
    async def test_never_exceeds_ceiling(self) -> None:
        tracker = InFlightTracker()
        runner = BoundedConcurrencyRunner(3)

        await runner.run(list(range(10)), tracker.op)

        assert tracker.peak == 3

    @pytest.mark.asyncio
    async def test_seven_items_run_as_five_then_two(self) -> None:
        """The second batch starts only after every item of the first settled."""
        tracker = InFlightTracker()
        runner = BoundedConcurrencyRunner(5)

        results = await runner.run(list(range(7)), tracker.op)

        assert sorted(results) == [0, 10, 20, 30, 40, 50, 60]
        assert tracker.peak == 5
        first_second_batch_start = min(
            tracker.events.index(("start", 5)),
            tracker.events.index(("start", 6)),
        )
        for item in range(5):
            assert tracker.events.index(("end", item)) < first_second_batch_start

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self) -> None:
        runner = BoundedConcurrencyRunner(2)
        attempted = []

        async def op(item: int) -> int:
            attempted.append(item)
            if item % 2:
                raise RuntimeError(f"item {item} failed")
            return item

        results = await runner.run([0, 1, 2, 3, 4], op)

        assert sorted(attempted) == [0, 1, 2, 3, 4]
        assert sorted(results) == [0, 2, 4]

    @pytest.mark.asyncio
    async def test_all_failures_yield_empty_list(self) -> None:
        runner = BoundedConcurrencyRunner(4)

        async def op(item: int) -> int:
            raise ValueError("nope")

        assert await runner.run([1, 2, 3], op, describe=lambda item: f"item-{item}") == []

    @pytest.mark.asyncio
    async def test_cancellation_is_not_swallowed(self) -> None:
        runner = BoundedConcurrencyRunner(2)

        async def op(item: int) -> int:
            if item == 1:
                raise asyncio.CancelledError()
            return item

        with pytest.raises(asyncio.CancelledError):
            await runner.run([0, 1], op)
