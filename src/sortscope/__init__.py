from .algorithms import (
    InvalidChoiceError,
    SortAlgorithm,
    bubble_sort,
    get_sorter,
    partition,
    quick_sort,
)
from .benchmark import AlgorithmStats, BenchmarkResult, compare_algorithms
from .io import export_results_json
from .runner import SortOutcome, parse_numbers, run_session, time_sort

__all__ = [
    "InvalidChoiceError",
    "SortAlgorithm",
    "bubble_sort",
    "quick_sort",
    "partition",
    "get_sorter",
    "SortOutcome",
    "parse_numbers",
    "run_session",
    "time_sort",
    "AlgorithmStats",
    "BenchmarkResult",
    "compare_algorithms",
    "export_results_json",
]
