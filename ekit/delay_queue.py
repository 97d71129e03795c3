"""A blocking queue that releases elements only once their delay has run out."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import TypeVar

from ekit.priority_queue import (
    BlockingQueue,
    ConcurrentPriorityQueue,
    EmptyQueueError,
    OutOfCapacityError,
    _Deadline,
)


class Delayable(ABC):
    """An element that knows how long it has left before it is due."""

    @abstractmethod
    def delay(self) -> float:
        """Seconds until the element is due; zero or less means it is due now."""


D = TypeVar("D", bound=Delayable)


def _compare_delays(a: Delayable, b: Delayable) -> int:
    first = a.delay()
    second = b.delay()
    return (first > second) - (first < second)


class DelayQueue(BlockingQueue[D]):
    """Queue whose ``dequeue`` only hands out elements whose ``delay()`` is at most zero.

    Timing is only as precise as the thread scheduler; expect errors of a few
    milliseconds. A ``capacity`` of zero or less makes the queue unbounded.
    """

    def __init__(self, capacity: int) -> None:
        self._queue: ConcurrentPriorityQueue[D] = ConcurrentPriorityQueue(capacity, _compare_delays)
        self._changed = threading.Condition()

    def enqueue(self, item: D, timeout: float | None = None) -> None:
        """Add ``item``, waiting while the queue is full; raise TimeoutError when time runs out."""
        deadline = _Deadline(timeout)
        with self._changed:
            while True:
                remaining = deadline.remaining()
                try:
                    self._queue.enqueue(item)
                except OutOfCapacityError:
                    self._changed.wait(remaining)
                    continue
                self._changed.notify_all()
                return

    def dequeue(self, timeout: float | None = None) -> D:
        """Remove and return the earliest due element, waiting until it is due.

        Raise TimeoutError if nothing becomes due before ``timeout`` runs out.
        """
        deadline = _Deadline(timeout)
        with self._changed:
            while True:
                remaining = deadline.remaining()
                try:
                    head = self._queue.peek()
                except EmptyQueueError:
                    self._changed.wait(remaining)
                    continue
                delay = head.delay()
                if delay <= 0:
                    item = self._queue.dequeue()
                    self._changed.notify_all()
                    return item
                self._changed.wait(delay if remaining is None else min(delay, remaining))

    def __len__(self) -> int:
        return len(self._queue)