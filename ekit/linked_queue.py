"""An unbounded thread-safe FIFO queue."""

from __future__ import annotations

import threading
from typing import Generic, Optional, TypeVar

from ekit.priority_queue import EmptyQueueError, Queue

T = TypeVar("T")


class _Node(Generic[T]):
    __slots__ = ("value", "next")

    def __init__(self, value: Optional[T]) -> None:
        self.value = value
        self.next: Optional[_Node[T]] = None


class ConcurrentLinkedQueue(Queue[T]):
    """Unbounded FIFO queue safe for many producers and consumers.

    The list always starts with a sentinel node. Producers only touch the
    tail and consumers only touch the head, each side under its own lock,
    so enqueuing and dequeuing never wait on each other.
    """

    def __init__(self) -> None:
        sentinel: _Node[T] = _Node(None)
        self._head = sentinel
        self._tail = sentinel
        self._head_lock = threading.Lock()
        self._tail_lock = threading.Lock()

    def enqueue(self, item: T) -> None:
        """Append ``item``; an unbounded queue always accepts it."""
        node = _Node(item)
        with self._tail_lock:
            self._tail.next = node
            self._tail = node

    def dequeue(self) -> T:
        """Remove and return the oldest element; raise EmptyQueueError if empty."""
        with self._head_lock:
            first = self._head.next
            if first is None:
                raise EmptyQueueError()
            value = first.value
            # The first real node becomes the new sentinel.
            first.value = None
            self._head = first
        return value  # type: ignore[return-value]

    def as_list(self) -> list[T]:
        """Return a snapshot of the queued elements, oldest first."""
        with self._head_lock:
            result: list[T] = []
            node = self._head.next
            while node is not None:
                result.append(node.value)  # type: ignore[arg-type]
                node = node.next
            return result