"""An ordered map driven by a user-supplied comparator."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Generic, Mapping, TypeVar

from sortedcontainers import SortedKeyList

K = TypeVar("K")
V = TypeVar("V")

Comparator = Callable[[K, K], int]


class ComparatorMissingError(ValueError):
    """Raised when an ordered container is built without a comparator."""

    def __init__(self) -> None:
        super().__init__("ekit: comparator must not be None")


@dataclass(slots=True)
class _Entry(Generic[K, V]):
    key: K
    value: V


class TreeMap(Generic[K, V]):
    """Map that keeps its keys sorted by ``compare(a, b)`` (negative, zero, positive)."""

    def __init__(self, compare: Comparator | None) -> None:
        if compare is None:
            raise ComparatorMissingError()
        self._compare = compare
        self._sort_key = cmp_to_key(compare)
        self._entries: SortedKeyList = SortedKeyList(key=lambda e: self._sort_key(e.key))

    def _index(self, key: K) -> int | None:
        position = self._entries.bisect_key_left(self._sort_key(key))
        if position < len(self._entries) and self._compare(self._entries[position].key, key) == 0:
            return position
        return None

    def put(self, key: K, value: V) -> None:
        """Store ``value`` under ``key``, replacing any value already there."""
        position = self._index(key)
        if position is None:
            self._entries.add(_Entry(key, value))
        else:
            self._entries[position].value = value

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the value under ``key``, or ``default`` if it is absent."""
        position = self._index(key)
        return default if position is None else self._entries[position].value

    def remove(self, key: K) -> None:
        """Remove ``key`` if present; a missing key is ignored."""
        position = self._index(key)
        if position is not None:
            del self._entries[position]

    def keys(self) -> list[K]:
        """Return the keys in ascending order."""
        return [entry.key for entry in self._entries]

    def values(self) -> list[V]:
        """Return the values in key order."""
        return [entry.value for entry in self._entries]

    def key_values(self) -> tuple[list[K], list[V]]:
        """Return keys and values in key order."""
        return self.keys(), self.values()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return self._index(key) is not None  # type: ignore[arg-type]


def tree_map_from(compare: Comparator | None, mapping: Mapping[K, V] | None) -> TreeMap[K, V]:
    """Build a TreeMap holding every pair of ``mapping``."""
    tree = TreeMap(compare)
    for key, value in (mapping or {}).items():
        tree.put(key, value)
    return tree