"""Set types: a hash-based one and an ordered one driven by a comparator."""

from __future__ import annotations

from typing import Generic, Hashable, TypeVar

from ekit.treemap import Comparator, TreeMap

T = TypeVar("T")
H = TypeVar("H", bound=Hashable)


class MapSet(Generic[H]):
    """Set of hashable values."""

    def __init__(self) -> None:
        self._items: dict[H, None] = {}

    def add(self, key: H) -> None:
        """Add ``key``; adding it twice has no further effect."""
        self._items[key] = None

    def delete(self, key: H) -> None:
        """Remove ``key`` if present."""
        self._items.pop(key, None)

    def exist(self, key: H) -> bool:
        """Return True if ``key`` is in the set."""
        return key in self._items

    def keys(self) -> list[H]:
        """Return the members; the order carries no meaning."""
        return list(self._items)


class TreeSet(Generic[T]):
    """Set kept in the order given by a comparator."""

    def __init__(self, compare: Comparator | None) -> None:
        self._tree: TreeMap[T, None] = TreeMap(compare)

    def add(self, key: T) -> None:
        """Add ``key``; adding it twice has no further effect."""
        self._tree.put(key, None)

    def delete(self, key: T) -> None:
        """Remove ``key`` if present."""
        self._tree.remove(key)

    def exist(self, key: T) -> bool:
        """Return True if ``key`` is in the set."""
        return key in self._tree

    def keys(self) -> list[T]:
        """Return the members in ascending order."""
        return self._tree.keys()