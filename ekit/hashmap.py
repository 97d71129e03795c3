"""A hash map keyed by objects that supply their own hash code and equality."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Iterator, TypeVar


class Hashable(ABC):
    """A key that provides its own hash code and equality test."""

    @abstractmethod
    def code(self) -> int:
        """Return the hash code; it should spread keys evenly to avoid collisions."""

    @abstractmethod
    def equals(self, other: Any) -> bool:
        """Return True if ``other`` is the same key as this one."""


K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


@dataclass(slots=True)
class _Entry(Generic[K, V]):
    key: K
    value: V


class HashMap(Generic[K, V]):
    """Map whose buckets are chosen by ``key.code()`` and searched with ``equals``."""

    def __init__(self) -> None:
        self._buckets: dict[int, list[_Entry[K, V]]] = {}

    def _entries(self) -> Iterator[_Entry[K, V]]:
        for bucket in self._buckets.values():
            yield from bucket

    def _find(self, key: K) -> _Entry[K, V] | None:
        for entry in self._buckets.get(key.code(), ()):
            if entry.key.equals(key):
                return entry
        return None

    def put(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, replacing any value already there."""
        bucket = self._buckets.setdefault(key.code(), [])
        for entry in bucket:
            if entry.key.equals(key):
                entry.value = value
                return
        bucket.append(_Entry(key, value))

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the value stored under ``key``, or ``default`` if there is none."""
        entry = self._find(key)
        return default if entry is None else entry.value

    def delete(self, key: K) -> V:
        """Remove ``key`` and return its value; raise KeyError if it is absent."""
        code = key.code()
        bucket = self._buckets.get(code)
        if bucket is not None:
            for position, entry in enumerate(bucket):
                if entry.key.equals(key):
                    del bucket[position]
                    if not bucket:
                        del self._buckets[code]
                    return entry.value
        raise KeyError(key)

    def keys(self) -> list[K]:
        """Return all keys; the order carries no meaning."""
        return [entry.key for entry in self._entries()]

    def values(self) -> list[V]:
        """Return all values; the order carries no meaning."""
        return [entry.value for entry in self._entries()]

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, Hashable) and self._find(key) is not None  # type: ignore[arg-type]