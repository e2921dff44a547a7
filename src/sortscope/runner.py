# src/sortscope/runner.py
from __future__ import annotations

import logging
import re
import sys
import time
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .algorithms import InvalidChoiceError, SortAlgorithm, get_sorter, recursion_headroom, resolve_choice

logger = logging.getLogger(__name__)

NUMBERS_PROMPT = "Enter numbers to sort (separated by spaces): "
CHOICE_PROMPT = "Choose sorting algorithm: 1 for Bubble Sort, 2 for Quick Sort: "

_INT_PREFIX = re.compile(r"[+-]?[0-9]+", re.ASCII)
# whitespace as the C locale sees it
_SPACE = re.compile(r"[ \t\n\r\f\v]+")


@dataclass
class SortOutcome:
    algorithm: SortAlgorithm
    data: List[int]
    elapsed_us: int


def parse_numbers(text: str) -> List[int]:
    """
    Read whitespace separated integers, stopping at the first token that is
    not a whole integer. A token with a numeric prefix ("12abc", "3.5")
    still contributes that prefix before parsing stops.
    """
    numbers: List[int] = []
    for token in _SPACE.split(text.strip(" \t\n\r\f\v")):
        if not token:
            break
        m = _INT_PREFIX.match(token)
        if m is None:
            break
        numbers.append(int(m.group(0)))
        if m.end() != len(token):
            break
    return numbers


def parse_choice(text: str) -> Optional[int]:
    values = parse_numbers(text)
    return values[0] if values else None


def read_choice(stdin: TextIO) -> Optional[int]:
    """Skip blank lines like stream extraction does, then parse the first token."""
    for line in iter(stdin.readline, ""):
        if line.strip(" \t\n\r\f\v"):
            return parse_choice(line)
    return None


def format_sorted(data: List[int]) -> str:
    return " ".join(str(x) for x in data)


def time_sort(algorithm: SortAlgorithm | int, data: List[int]) -> SortOutcome:
    """Sort `data` in place with the chosen algorithm, timing only the sort call."""
    algo = resolve_choice(algorithm)
    sorter = get_sorter(algo)
    # last-element pivot recurses once per element on sorted input
    with recursion_headroom(len(data)):
        t0 = time.perf_counter_ns()
        sorter(data)
        elapsed_ns = time.perf_counter_ns() - t0
    logger.debug("%s sorted %d values in %d ns", algo.label, len(data), elapsed_ns)
    return SortOutcome(algorithm=algo, data=data, elapsed_us=elapsed_ns // 1000)


def run_session(stdin: TextIO, stdout: TextIO) -> int:
    """Run one interactive sort. Returns the process exit status."""
    stdout.write(NUMBERS_PROMPT)
    stdout.flush()
    data = parse_numbers(stdin.readline())

    stdout.write(CHOICE_PROMPT)
    stdout.flush()
    choice = read_choice(stdin)

    try:
        outcome = time_sort(choice, data)
    except InvalidChoiceError as e:
        logger.debug("rejected selector: %r", e.choice)
        stdout.write("Invalid choice.\n")
        return 1

    stdout.write(f"Sorted Data: {format_sorted(outcome.data)}\n")
    stdout.write(f"Time taken: {outcome.elapsed_us} microseconds\n")
    return 0


def main() -> int:
    return run_session(sys.stdin, sys.stdout)
