from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from ekit.hashmap import HashMap, Hashable


@dataclass(frozen=True)
class Data(Hashable):
    id: int

    def code(self) -> int:
        return self.id % 10

    def equals(self, other: Any) -> bool:
        return isinstance(other, Data) and other.id == self.id


@dataclass(frozen=True)
class MockKey(Hashable):
    values: tuple[int, ...] = field(default=())

    def code(self) -> int:
        return 3 + sum(v * 7 for v in self.values)

    def equals(self, other: Any) -> bool:
        return isinstance(other, MockKey) and other.values == self.values


def build(pairs):
    hm = HashMap()
    for key_id, value in pairs:
        hm.put(Data(key_id), value)
    return hm


@pytest.fixture
def filled():
    return build([(1, 1), (2, 2), (3, 3), (11, 11), (1, 101)])


def test_put_layout(filled):
    assert [k.id for k in filled.keys()] == [1, 11, 2, 3]
    assert filled.values() == [101, 11, 2, 3]
    assert len(filled) == 4


@pytest.mark.parametrize(
    "key_id, found, want",
    [
        (1, True, 101),
        (11, True, 11),
        (8, False, None),
        (21, False, None),
    ],
)
def test_get(filled, key_id, found, want):
    assert (Data(key_id) in filled) is found
    assert filled.get(Data(key_id)) == want


def test_get_default(filled):
    assert filled.get(Data(8), -1) == -1


def test_delete_missing_bucket():
    hm = HashMap()
    with pytest.raises(KeyError):
        hm.delete(Data(1))


def test_delete_missing_key_in_bucket():
    hm = build([(1, 1)])
    with pytest.raises(KeyError):
        hm.delete(Data(11))
    assert [k.id for k in hm.keys()] == [1]


@pytest.mark.parametrize(
    "initial, delete_id, want_val, want_ids",
    [
        ([1, 11, 21], 1, 1, [11, 21]),
        ([1], 1, 1, []),
        ([1, 11, 21], 11, 11, [1, 21]),
        ([1, 11, 21], 21, 21, [1, 11]),
    ],
)
def test_delete(initial, delete_id, want_val, want_ids):
    hm = build([(i, i) for i in initial])
    assert hm.delete(Data(delete_id)) == want_val
    assert [k.id for k in hm.keys()] == want_ids
    assert hm.values() == want_ids
    assert Data(delete_id) not in hm


@pytest.mark.parametrize(
    "pairs, want_ids, want_values",
    [
        ([], [], []),
        ([(1, 1)], [1], [1]),
        ([(1, 1), (2, 2)], [1, 2], [1, 2]),
        ([(1, 1), (1, 11)], [1], [11]),
        ([(1, 10), (2, 20), (1, 11)], [1, 2], [11, 20]),
        ([(1, 11), (11, 111), (111, 1111)], [1, 11, 111], [11, 111, 1111]),
        ([(1, 1), (11, 10), (2, 2), (22, 20)], [1, 2, 11, 22], [1, 2, 10, 20]),
    ],
)
def test_keys_values(pairs, want_ids, want_values):
    hm = build(pairs)
    assert sorted(k.id for k in hm.keys()) == want_ids
    assert sorted(hm.values()) == want_values
    assert len(hm) == len(want_ids)


def test_mock_key_example():
    hm = HashMap()
    hm.put(MockKey(), 123)
    assert hm.get(MockKey()) == 123
    assert hm.get(MockKey((1, 2))) is None