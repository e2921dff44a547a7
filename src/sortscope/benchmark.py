# src/sortscope/benchmark.py
from __future__ import annotations

import gc
import logging
import math
import os
import random
import time
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .algorithms import SortAlgorithm, bubble_sort, quick_sort
from .io import export_results_json
from .plotting import build_reference_curves, runtime_figure
from .report import build_report_html
from .utils import CIResult, bootstrap_confidence_interval, finite, rank, t_confidence_interval

logger = logging.getLogger(__name__)

INPUT_KINDS = ("random", "sorted", "reversed", "few_unique")


@dataclass
class AlgorithmStats:
    label: str
    times: Dict[int, List[float]] = field(default_factory=dict)   # n -> list of seconds
    time_ci: Dict[int, CIResult] = field(default_factory=dict)
    slope: Optional[float] = None
    summary: str = ""
    errors: List[str] = field(default_factory=list)


@dataclass
class BenchmarkResult:
    title: str
    ns: List[int]
    input_kind: str
    stats: Dict[str, AlgorithmStats]
    html: Optional[str] = None
    html_path: Optional[str] = None

    def _repr_html_(self) -> str:  # Jupyter-friendly
        return self.html or ""


def build_input(n: int, kind: str, rng: random.Random) -> List[int]:
    if kind == "random":
        return [rng.randint(0, n * 10) for _ in range(n)]
    if kind == "sorted":
        return list(range(n))
    if kind == "reversed":
        return list(range(n, 0, -1))
    if kind == "few_unique":
        return [rng.randint(0, 4) for _ in range(n)]
    raise ValueError(f"input_kind must be one of {', '.join(INPUT_KINDS)}")


def _sorters(early_exit: bool) -> Dict[str, Callable[[List[int]], None]]:
    return {
        SortAlgorithm.BUBBLE.label: partial(bubble_sort, early_exit=early_exit),
        SortAlgorithm.QUICK.label: quick_sort,
    }


def _timed_run(sorter: Callable[[List[int]], None], data: List[int]) -> Tuple[float, Optional[str]]:
    """Run one sort on a private copy; returns (seconds, error message or None)."""
    work = list(data)
    try:
        t0 = time.perf_counter()
        sorter(work)
        duration = time.perf_counter() - t0
    except RecursionError:
        return float("nan"), "recursion limit exceeded"
    except Exception as e:
        return float("nan"), f"exception during run: {e!r}"
    if work != sorted(data):
        return float("nan"), "output does not match the reference sort"
    return duration, None


def _empirical_slope(ns: List[int], means: List[float]) -> Optional[float]:
    arr = np.asarray(means, dtype=float)
    mask = np.isfinite(arr) & (arr > 0)
    if mask.sum() < 2:
        return None
    xs = np.log(np.asarray(ns, dtype=float)[mask])
    ys = np.log(arr[mask])
    if np.ptp(xs) == 0:
        return None
    slope, _ = np.polyfit(xs, ys, 1)
    return float(slope)


def _slope_summary(slope: Optional[float]) -> str:
    if slope is None:
        return "Not enough reliable data to estimate scaling."
    if slope < 0.3:
        family = "nearly constant"
    elif slope < 0.8:
        family = "O(log n)"
    elif slope < 1.4:
        family = "O(n) / O(n log n)"
    elif slope < 2.5:
        family = "O(n^2)"
    else:
        family = "worse than quadratic"
    return f"Empirical slope ≈ {slope:.2f}, suggests {family}."


def compare_algorithms(
    ns: List[int],
    repeats: int = 5,
    warmup: int = 1,
    input_kind: str = "random",
    ci_method: str = "t",
    confidence: float = 0.95,
    seed: Optional[int] = None,
    reference_curves: Tuple[str, ...] = ("n", "nlogn", "n**2"),
    normalize_ref_at: str = "max",
    html_out: Optional[str] = "sortscope_report.html",
    json_out: Optional[str] = None,
    title: str = "Bubble Sort vs. Quick Sort",
    notes: Optional[str] = None,
    early_exit: bool = False,
    verbose: bool = True,
) -> BenchmarkResult:
    """
    Time both sorts over every size in `ns` and summarise the results.

    Each (algorithm, n, repeat) sorts a fresh copy of the same generated
    input and is checked against `sorted()`. Failed runs (wrong output,
    recursion limit, other exceptions) are recorded in the algorithm's
    `errors` and count as NaN samples; they never abort the benchmark.
    """
    if not isinstance(ns, list) or not ns:
        raise ValueError("ns must be a non-empty list of integers.")
    for n in ns:
        if not isinstance(n, int) or isinstance(n, bool) or n <= 0:
            raise ValueError("All values in ns must be positive integers.")
    if not isinstance(repeats, int) or repeats < 1:
        raise ValueError("repeats must be a positive integer.")
    if input_kind not in INPUT_KINDS:
        raise ValueError(f"input_kind must be one of {', '.join(INPUT_KINDS)}")
    if ci_method not in ("t", "bootstrap"):
        raise ValueError("ci_method must be 't' or 'bootstrap'")
    if not 0.0 < confidence < 1.0:
        raise ValueError("confidence must be between 0 and 1.")

    if verbose:
        print(f"Benchmarking {len(ns)} sizes x {repeats} repeats on {input_kind} input...")

    rng = random.Random(seed)
    sorters = _sorters(early_exit)
    stats: Dict[str, AlgorithmStats] = {label: AlgorithmStats(label=label) for label in sorters}

    # Warmup
    for label, sorter in sorters.items():
        for _ in range(max(0, warmup)):
            for n in ns[: min(2, len(ns))]:
                _timed_run(sorter, build_input(n, input_kind, rng))

    # Main timed runs; both algorithms see the same input per repeat
    for n in ns:
        for _ in range(repeats):
            data = build_input(n, input_kind, rng)
            for label, sorter in sorters.items():
                gc.collect()
                duration, error = _timed_run(sorter, data)
                if error is not None:
                    msg = f"n={n}: {error}"
                    if msg not in stats[label].errors:
                        stats[label].errors.append(msg)
                    logger.warning("%s failed at %s", label, msg)
                stats[label].times.setdefault(n, []).append(duration)
        logger.debug("finished n=%d", n)

    # Confidence intervals
    for s in stats.values():
        for n in ns:
            samples = finite(s.times.get(n, []))
            if ci_method == "t":
                s.time_ci[n] = t_confidence_interval(samples, confidence)
            else:
                s.time_ci[n] = bootstrap_confidence_interval(samples, confidence, seed=42 if seed is None else seed)

    labels = list(stats.keys())
    time_means = {label: [stats[label].time_ci[n].mean for n in ns] for label in labels}
    time_lowers = {label: [stats[label].time_ci[n].lower for n in ns] for label in labels}
    time_uppers = {label: [stats[label].time_ci[n].upper for n in ns] for label in labels}

    for label in labels:
        slope = _empirical_slope(ns, time_means[label])
        stats[label].slope = slope
        stats[label].summary = _slope_summary(slope)

    result = BenchmarkResult(title=title, ns=ns, input_kind=input_kind, stats=stats)

    if html_out:
        html = _render_report(result, time_means, time_lowers, time_uppers, reference_curves,
                              normalize_ref_at, ci_method, confidence, repeats, warmup, early_exit,
                              notes, os.path.abspath(html_out))
        with open(html_out, "w", encoding="utf-8") as f:
            f.write(html)
        result.html = html
        result.html_path = os.path.abspath(html_out)

    if json_out:
        export_results_json(result, json_out)

    if verbose:
        for label in labels:
            print(f"  {label}: {stats[label].summary}")
        if result.html_path:
            print(f"Report saved to: {result.html_path}")

    return result


def _render_report(
    result: BenchmarkResult,
    time_means: Dict[str, List[float]],
    time_lowers: Dict[str, List[float]],
    time_uppers: Dict[str, List[float]],
    reference_curves: Tuple[str, ...],
    normalize_ref_at: str,
    ci_method: str,
    confidence: float,
    repeats: int,
    warmup: int,
    early_exit: bool,
    notes: Optional[str],
    html_path: str,
) -> str:
    ns = result.ns
    labels = list(result.stats.keys())

    anchor_idx = 0 if normalize_ref_at == "min" else -1
    anchors = [v[anchor_idx] for v in time_means.values() if v and math.isfinite(v[anchor_idx])]
    y_anchor = float(np.mean(anchors)) if anchors else 1.0
    ref_curves = build_reference_curves(ns, reference_curves, y_anchor, normalize_at=normalize_ref_at)
    fig = runtime_figure(ns, time_means, time_lowers, time_uppers, ref_curves, result.title)

    comparison_rows: List[Dict[str, Any]] = []
    for i, n in enumerate(ns):
        means = [time_means[label][i] for label in labels]
        if not any(math.isfinite(m) for m in means):
            comparison_rows.append({"n": n, "best_runtime": "N/A", "worst_runtime": "N/A"})
            continue
        r = rank(means)
        finite_ranks = [r[j] for j, m in enumerate(means) if math.isfinite(m)]
        best = labels[r.index(min(finite_ranks))]
        worst = labels[r.index(max(finite_ranks))]
        comparison_rows.append({"n": n, "best_runtime": best, "worst_runtime": worst})

    runtime_table: List[Dict[str, Any]] = []
    for n in ns:
        row: Dict[str, Any] = {"n": n}
        for label in labels:
            ci = result.stats[label].time_ci[n]
            row[label] = {"mean": ci.mean, "lower": ci.lower, "upper": ci.upper}
        runtime_table.append(row)

    methods_text = (
        f"- **Runtime** measured with `time.perf_counter()` around a single in-place sort; "
        f"each (algorithm, n) pair ran {repeats} times after {warmup} warmup rounds.\n"
        f"- Every run is checked against `sorted()`; failed runs are excluded from the statistics.\n"
        f"- **Confidence intervals:** {ci_method.upper()} at {int(100 * confidence)}% confidence.\n"
        f"- Bubble sort early exit: {'on' if early_exit else 'off'}. "
        f"Quick sort uses the last element of each range as pivot."
    )

    return build_report_html(
        title=result.title,
        notes=notes,
        ns=ns,
        input_kind=result.input_kind,
        runtime_table=runtime_table,
        comparison_rows=comparison_rows,
        runtime_fig=fig,
        summaries={label: s.summary for label, s in result.stats.items()},
        methods_text=methods_text,
        errors={label: s.errors for label, s in result.stats.items()},
        html_path=html_path,
    )
