import pytest

from ekit.sets import MapSet, TreeSet
from ekit.treemap import ComparatorMissingError


def ascending(a, b):
    if a < b:
        return -1
    return 1 if a > b else 0


def filled(container, values):
    for value in values:
        container.add(value)
    return container


def test_map_set_add():
    assert sorted(filled(MapSet(), [1, 2, 3, 1]).keys()) == [1, 2, 3]


@pytest.mark.parametrize("initial, delete, want", [([2], 2, []), ([2], 3, [2])])
def test_map_set_delete(initial, delete, want):
    s = filled(MapSet(), initial)
    s.delete(delete)
    assert sorted(s.keys()) == want


@pytest.mark.parametrize("value, exists", [(1, True), (2, False)])
def test_map_set_exist(value, exists):
    assert filled(MapSet(), [1]).exist(value) is exists


def test_map_set_keys():
    keys = filled(MapSet(), [1, 2, 3]).keys()
    assert len(keys) == 3
    assert set(keys) == {1, 2, 3}


def test_tree_set_without_comparator():
    with pytest.raises(ComparatorMissingError):
        TreeSet(None)


@pytest.mark.parametrize(
    "keys, want",
    [([], []), ([0, 1, 2, 1], [0, 1, 2]), ([0, 2, 1, 6, 5], [0, 1, 2, 5, 6])],
)
def test_tree_set_add(keys, want):
    assert filled(TreeSet(ascending), keys).keys() == want


@pytest.mark.parametrize(
    "keys, delete, want",
    [([], 0, []), ([0, 1, 2], 0, [1, 2]), ([0, 1, 2], 3, [0, 1, 2])],
)
def test_tree_set_delete(keys, delete, want):
    s = filled(TreeSet(ascending), keys)
    s.delete(delete)
    assert s.keys() == want


@pytest.mark.parametrize(
    "keys, key, want",
    [([], 0, False), ([0, 1, 2], 0, True), ([0, 1, 2], 3, False)],
)
def test_tree_set_exist(keys, key, want):
    assert filled(TreeSet(ascending), keys).exist(key) is want