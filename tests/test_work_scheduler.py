"""Tests for the bounded-concurrency scheduler."""

import asyncio

import pytest

from ipmi_discovery.core.work_scheduler import BoundedScheduler
from ipmi_discovery.utils.error_handler import ConfigurationError


class ConcurrencyCounter:
    """Async operation that records the peak number of concurrent calls."""

    def __init__(self, delay=0.01):
        self.delay = delay
        self.active = 0
        self.peak = 0
        self.calls = 0

    async def __call__(self, item):
        self.active += 1
        self.calls += 1
        self.peak = max(self.peak, self.active)
        try:
            # Vary the delay so completions interleave
            await asyncio.sleep(self.delay * (1 + item % 3))
            return item * 2
        finally:
            self.active -= 1


@pytest.mark.parametrize("workers,count", [(1, 0), (1, 5), (2, 7), (4, 20), (32, 10), (3, 3)])
def test_never_exceeds_worker_budget(workers, count):
    """Peak in-flight operations stays within the budget and all items complete."""
    counter = ConcurrencyCounter()
    results = asyncio.run(BoundedScheduler(workers).run(range(count), counter))

    assert counter.peak <= workers
    assert counter.calls == count
    assert sorted(results) == [(i, i * 2) for i in range(count)]


def test_budget_is_actually_used():
    """With more items than workers, the scheduler fills every slot."""
    counter = ConcurrencyCounter()
    asyncio.run(BoundedScheduler(4).run(range(12), counter))
    assert counter.peak == 4


def test_failed_operation_yields_no_entry():
    """An erroring operation is dropped without aborting the batch."""

    async def operation(item):
        await asyncio.sleep(0)
        if item == 2:
            raise OSError("boom")
        return item

    results = asyncio.run(BoundedScheduler(2).run(range(5), operation))
    assert sorted(item for item, _ in results) == [0, 1, 3, 4]


def test_results_arrive_in_completion_order():
    """Faster operations are harvested before slower ones submitted earlier."""

    async def operation(item):
        await asyncio.sleep(0.05 if item == 0 else 0.0)
        return item

    results = asyncio.run(BoundedScheduler(2).run([0, 1], operation))
    assert [item for item, _ in results] == [1, 0]


def test_zero_workers_rejected():
    """A worker budget below one is a configuration error."""
    with pytest.raises(ConfigurationError):
        BoundedScheduler(0)
