"""
Bounded-concurrency executor shared by every scan stage.

The scheduler knows nothing about pings or IPMI. It takes a list of items and
an async operation, keeps at most ``workers`` operations in flight, and hands
back ``(item, result)`` pairs in completion order. An operation that raises is
dropped from the results instead of aborting the batch.
"""

import asyncio
from typing import (
    AsyncIterator, Awaitable, Callable, Dict, Iterable, List, Tuple, TypeVar
)

from ..utils.error_handler import ConfigurationError
from ..utils.logger import get_logger

T = TypeVar("T")
R = TypeVar("R")


class BoundedScheduler:
    """
    Runs async operations over a batch of items with a cap on in-flight work.

    Tasks are submitted until the cap is reached; each completion is harvested
    before the next pending item is submitted, and the batch is fully drained
    before iteration ends.
    """

    def __init__(self, workers: int = 32):
        """
        Initialize the scheduler.

        Args:
            workers: Maximum number of operations in flight at once

        Raises:
            ConfigurationError: If ``workers`` is less than 1
        """
        if workers < 1:
            raise ConfigurationError(f"--workers must be at least 1, got {workers}")
        self.workers = workers
        self.logger = get_logger(__name__)

    async def as_completed(
        self, items: Iterable[T], operation: Callable[[T], Awaitable[R]]
    ) -> AsyncIterator[Tuple[T, R]]:
        """
        Yield ``(item, result)`` for every operation that completes without error.

        Args:
            items: Work items to submit
            operation: Coroutine function applied to each item
        """
        pending = iter(items)
        in_flight: Dict["asyncio.Task[R]", T] = {}

        def submit_next() -> bool:
            for item in pending:
                in_flight[asyncio.ensure_future(operation(item))] = item
                return True
            return False

        try:
            while len(in_flight) < self.workers and submit_next():
                pass

            while in_flight:
                done, _ = await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    item = in_flight.pop(task)
                    # Refill the freed slot before handing the result out.
                    submit_next()
                    if task.cancelled():
                        self.logger.debug(f"Operation for {item} was cancelled")
                        continue
                    error = task.exception()
                    if error is not None:
                        self.logger.debug(f"Operation for {item} failed: {error!r}")
                        continue
                    yield item, task.result()
        finally:
            for task in in_flight:
                task.cancel()

    async def run(
        self, items: Iterable[T], operation: Callable[[T], Awaitable[R]]
    ) -> List[Tuple[T, R]]:
        """Collect every ``(item, result)`` pair from :meth:`as_completed`."""
        return [pair async for pair in self.as_completed(items, operation)]
