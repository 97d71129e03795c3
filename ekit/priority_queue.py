"""Queue interfaces, the errors they raise and a thread-safe priority queue."""

from __future__ import annotations

import heapq
import threading
import time
from abc import ABC, abstractmethod
from functools import cmp_to_key
from typing import Any, Generic, TypeVar

from ekit.treemap import Comparator, ComparatorMissingError

T = TypeVar("T")


class EmptyQueueError(LookupError):
    """Raised when an element is requested from an empty queue."""

    def __init__(self, message: str = "ekit: queue is empty") -> None:
        super().__init__(message)


class OutOfCapacityError(OverflowError):
    """Raised when an element is added to a bounded queue that is full."""

    def __init__(self, message: str = "ekit: queue is out of capacity") -> None:
        super().__init__(message)


class Queue(ABC, Generic[T]):
    """A queue that fails at once instead of waiting."""

    @abstractmethod
    def enqueue(self, item: T) -> None:
        """Add ``item``; raise OutOfCapacityError if the queue is full."""

    @abstractmethod
    def dequeue(self) -> T:
        """Remove and return the head; raise EmptyQueueError if there is none."""


class BlockingQueue(ABC, Generic[T]):
    """A queue whose operations wait, up to ``timeout`` seconds, for room or data.

    ``timeout=None`` waits without limit. A timeout that is zero or negative
    counts as already expired, and the call raises TimeoutError.
    """

    @abstractmethod
    def enqueue(self, item: T, timeout: float | None = None) -> None:
        """Add ``item``, waiting for room; raise TimeoutError when time runs out."""

    @abstractmethod
    def dequeue(self, timeout: float | None = None) -> T:
        """Remove and return the head, waiting for one; raise TimeoutError when time runs out."""


class _Deadline:
    """A point in time after which a blocking call gives up."""

    def __init__(self, timeout: float | None) -> None:
        self._at = None if timeout is None else time.monotonic() + timeout

    def remaining(self) -> float | None:
        """Seconds left, or None for no limit; raise TimeoutError once passed."""
        if self._at is None:
            return None
        left = self._at - time.monotonic()
        if left <= 0:
            raise TimeoutError("ekit: deadline exceeded")
        return left


class ConcurrentPriorityQueue(Queue[T]):
    """Thread-safe priority queue; the smallest element by ``compare`` comes out first.

    A ``capacity`` of zero or less makes the queue unbounded.
    """

    def __init__(self, capacity: int, compare: Comparator | None) -> None:
        if compare is None:
            raise ComparatorMissingError()
        self._capacity = max(capacity, 0)
        self._sort_key = cmp_to_key(compare)
        self._heap: list[Any] = []
        self._lock = threading.Lock()

    def enqueue(self, item: T) -> None:
        """Add ``item``; raise OutOfCapacityError if a bounded queue is full."""
        with self._lock:
            if self._capacity and len(self._heap) >= self._capacity:
                raise OutOfCapacityError()
            heapq.heappush(self._heap, self._sort_key(item))

    def dequeue(self) -> T:
        """Remove and return the smallest element; raise EmptyQueueError if empty."""
        with self._lock:
            if not self._heap:
                raise EmptyQueueError()
            return heapq.heappop(self._heap).obj

    def peek(self) -> T:
        """Return the smallest element without removing it; raise EmptyQueueError if empty."""
        with self._lock:
            if not self._heap:
                raise EmptyQueueError()
            return self._heap[0].obj

    def cap(self) -> int:
        """Return the capacity, or 0 for an unbounded queue."""
        return self._capacity

    def __len__(self) -> int:
        with self._lock:
            return len(self._heap)