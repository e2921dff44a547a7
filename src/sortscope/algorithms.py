# src/sortscope/algorithms.py
from __future__ import annotations

import sys
from contextlib import contextmanager
from enum import IntEnum
from typing import Callable, Iterator, List, Optional

Sorter = Callable[[List[int]], None]


class InvalidChoiceError(ValueError):
    """Raised when an algorithm selector does not name a known sort."""

    def __init__(self, choice: object):
        super().__init__(f"invalid sorting algorithm choice: {choice!r}")
        self.choice = choice


class SortAlgorithm(IntEnum):
    BUBBLE = 1
    QUICK = 2

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SortAlgorithm.BUBBLE: "Bubble Sort",
    SortAlgorithm.QUICK: "Quick Sort",
}


def bubble_sort(data: List[int], early_exit: bool = False) -> None:
    """
    Sort `data` in place with adjacent swaps.

    Pass `i` scans the unsorted prefix [0, n - i - 1) and swaps a pair only
    when the left value is strictly greater, so equal values keep their order.
    All n passes run unless `early_exit` is set, in which case the sort stops
    after the first pass that performs no swap.
    """
    n = len(data)
    for i in range(n):
        swapped = False
        for j in range(0, n - i - 1):
            if data[j] > data[j + 1]:
                data[j], data[j + 1] = data[j + 1], data[j]
                swapped = True
        if early_exit and not swapped:
            break


def partition(data: List[int], low: int, high: int) -> int:
    """Lomuto partition around data[high]; returns the pivot's final index."""
    pivot = data[high]
    i = low - 1
    for j in range(low, high):
        if data[j] < pivot:
            i += 1
            data[i], data[j] = data[j], data[i]
    data[i + 1], data[high] = data[high], data[i + 1]
    return i + 1


def quick_sort(data: List[int], low: int = 0, high: Optional[int] = None) -> None:
    """
    Sort the inclusive range [low, high] of `data` in place.

    The pivot is always the last element of the range, so already sorted or
    reverse sorted input costs O(n^2) comparisons and O(n) recursion depth.
    """
    if high is None:
        high = len(data) - 1
    if low >= high:
        return
    p = partition(data, low, high)
    quick_sort(data, low, p - 1)
    quick_sort(data, p + 1, high)


@contextmanager
def recursion_headroom(depth: int, margin: int = 1000) -> Iterator[None]:
    """Raise the interpreter recursion limit to fit `depth` extra frames, restoring it on exit."""
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(max(old, depth + margin))
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


_SORTERS = {
    SortAlgorithm.BUBBLE: bubble_sort,
    SortAlgorithm.QUICK: quick_sort,
}


def resolve_choice(choice: object) -> SortAlgorithm:
    if isinstance(choice, bool):
        raise InvalidChoiceError(choice)
    if isinstance(choice, str):
        try:
            choice = int(choice.strip())
        except ValueError:
            raise InvalidChoiceError(choice) from None
    try:
        return SortAlgorithm(choice)
    except (ValueError, TypeError):
        raise InvalidChoiceError(choice) from None


def get_sorter(choice: object) -> Sorter:
    """Map a selector (1, 2, SortAlgorithm or numeric string) to its sort function."""
    return _SORTERS[resolve_choice(choice)]
