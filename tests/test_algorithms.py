from __future__ import annotations

import random
import sys
from collections import Counter

import pytest

from sortscope import InvalidChoiceError, SortAlgorithm, bubble_sort, get_sorter, partition, quick_sort
from sortscope.algorithms import recursion_headroom

SORTS = [bubble_sort, quick_sort]


def _cases():
    rng = random.Random(1234)
    yield []
    yield [7]
    yield [4, 4, 4]
    yield [5, 3, 8, 1, 9, 2]
    yield list(range(20))
    yield list(range(20, 0, -1))
    yield [-3, 0, -3, 12, 7, -100, 7]
    for n in (2, 3, 10, 57):
        yield [rng.randint(-50, 50) for _ in range(n)]


@pytest.mark.parametrize("sort", SORTS)
def test_sorts_in_place_and_returns_none(sort):
    data = [3, 1, 2]
    assert sort(data) is None
    assert data == [1, 2, 3]


@pytest.mark.parametrize("sort", SORTS)
def test_output_is_ordered_permutation(sort):
    for case in _cases():
        data = list(case)
        sort(data)
        assert Counter(data) == Counter(case)
        assert all(a <= b for a, b in zip(data, data[1:]))


@pytest.mark.parametrize("sort", SORTS)
def test_sorted_input_is_unchanged(sort):
    for case in _cases():
        expected = sorted(case)
        data = list(expected)
        sort(data)
        assert data == expected


def test_both_algorithms_agree():
    for case in _cases():
        a, b = list(case), list(case)
        bubble_sort(a)
        quick_sort(b)
        assert a == b


@pytest.mark.parametrize("sort", SORTS)
def test_concrete_scenarios(sort):
    data = [5, 3, 8, 1, 9, 2]
    sort(data)
    assert data == [1, 2, 3, 5, 8, 9]

    data = [4, 4, 4]
    sort(data)
    assert data == [4, 4, 4]


def test_bubble_sort_keeps_equal_elements_in_order():
    class Item:
        def __init__(self, key, tag):
            self.key, self.tag = key, tag

        def __gt__(self, other):
            return self.key > other.key

    items = [Item(2, "a"), Item(1, "b"), Item(2, "c"), Item(1, "d")]
    bubble_sort(items)
    assert [i.tag for i in items] == ["b", "d", "a", "c"]


def test_bubble_sort_early_exit_same_result():
    for case in _cases():
        a, b = list(case), list(case)
        bubble_sort(a)
        bubble_sort(b, early_exit=True)
        assert a == b


def test_partition_places_last_element_as_pivot():
    data = [9, 1, 8, 2, 5]
    p = partition(data, 0, len(data) - 1)
    assert p == 2
    assert data[p] == 5
    assert all(x < 5 for x in data[:p])
    assert all(x >= 5 for x in data[p + 1:])


def test_quick_sort_subrange_only():
    data = [9, 5, 3, 4, 1, 0]
    quick_sort(data, 1, 4)
    assert data == [9, 1, 3, 4, 5, 0]


def test_quick_sort_sorted_input_with_recursion_headroom():
    # last-element pivot recurses once per element on sorted input
    limit = sys.getrecursionlimit()
    data = list(range(5000, 0, -1))
    with recursion_headroom(len(data)):
        assert sys.getrecursionlimit() >= 6000
        quick_sort(data)
    assert data == list(range(1, 5001))
    assert sys.getrecursionlimit() == limit


def test_recursion_headroom_restores_limit_on_error():
    limit = sys.getrecursionlimit()
    with pytest.raises(KeyError):
        with recursion_headroom(limit * 3):
            raise KeyError("boom")
    assert sys.getrecursionlimit() == limit


def test_recursion_headroom_never_lowers_limit():
    limit = sys.getrecursionlimit()
    with recursion_headroom(0, margin=0):
        assert sys.getrecursionlimit() == limit


@pytest.mark.parametrize("choice, expected", [
    (1, bubble_sort),
    (2, quick_sort),
    (SortAlgorithm.QUICK, quick_sort),
    ("1", bubble_sort),
    (" 2 ", quick_sort),
])
def test_get_sorter(choice, expected):
    assert get_sorter(choice) is expected


@pytest.mark.parametrize("choice", [0, 3, -1, None, "x", "", 1.5, True])
def test_get_sorter_rejects_unknown(choice):
    with pytest.raises(InvalidChoiceError) as exc:
        get_sorter(choice)
    assert exc.value.choice == choice
    assert isinstance(exc.value, ValueError)


def test_algorithm_labels():
    assert SortAlgorithm.BUBBLE.label == "Bubble Sort"
    assert SortAlgorithm.QUICK.label == "Quick Sort"
