"""Helpers that pull keys and values out of a mapping."""

from __future__ import annotations

from typing import Mapping, TypeVar

K = TypeVar("K")
V = TypeVar("V")


def keys(mapping: Mapping[K, V] | None) -> list[K]:
    """Return the keys of ``mapping``; None counts as empty."""
    return [] if mapping is None else list(mapping)


def values(mapping: Mapping[K, V] | None) -> list[V]:
    """Return the values of ``mapping``; None counts as empty."""
    return [] if mapping is None else list(mapping.values())


def keys_values(mapping: Mapping[K, V] | None) -> tuple[list[K], list[V]]:
    """Return keys and values as two lists whose positions correspond."""
    if mapping is None:
        return [], []
    items = list(mapping.items())
    return [k for k, _ in items], [v for _, v in items]