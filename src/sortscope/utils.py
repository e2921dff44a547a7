# src/sortscope/utils.py
from __future__ import annotations

import math
import statistics
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np


@dataclass
class CIResult:
    mean: float
    std: float
    n: int
    lower: float
    upper: float
    method: str  # "t" or "bootstrap"


# two-sided 95% t critical values for df = 1..30
_T95 = (
    12.706, 4.303, 3.182, 2.776, 2.571, 2.447, 2.365, 2.306, 2.262, 2.228,
    2.201, 2.179, 2.160, 2.145, 2.131, 2.120, 2.110, 2.101, 2.093, 2.086,
    2.080, 2.074, 2.069, 2.064, 2.060, 2.056, 2.052, 2.048, 2.045, 2.042,
)


def _critical_value(df: int, confidence: float) -> float:
    if abs(confidence - 0.95) < 1e-9 and df <= len(_T95):
        return _T95[df - 1]
    # normal approximation for other levels and large repeat counts
    return statistics.NormalDist().inv_cdf(0.5 + confidence / 2.0)


def finite(samples: Iterable[float]) -> List[float]:
    """Drop NaN/inf samples (failed runs) before aggregation."""
    return [float(x) for x in samples if isinstance(x, (int, float)) and math.isfinite(x)]


def t_confidence_interval(samples: Iterable[float], confidence: float = 0.95) -> CIResult:
    xs = np.asarray(list(samples), dtype=float)
    n = int(xs.size)
    if n == 0:
        nan = float("nan")
        return CIResult(nan, 0.0, 0, nan, nan, "t")
    mean = float(xs.mean())
    if n == 1:
        return CIResult(mean, 0.0, 1, mean, mean, "t")
    std = float(xs.std(ddof=1))
    half = _critical_value(n - 1, confidence) * std / math.sqrt(n)
    return CIResult(mean, std, n, mean - half, mean + half, "t")


def bootstrap_confidence_interval(
    samples: Iterable[float],
    confidence: float = 0.95,
    n_boot: int = 2000,
    seed: int = 42,
) -> CIResult:
    xs = np.asarray(list(samples), dtype=float)
    n = xs.size
    mean = float(np.mean(xs)) if n > 0 else float("nan")
    std = float(np.std(xs, ddof=1)) if n > 1 else 0.0
    if n <= 1:
        return CIResult(mean, std, n, mean, mean, "bootstrap")
    rng = np.random.default_rng(seed)
    draws = xs[rng.integers(0, n, size=(n_boot, n))]
    boots = draws.mean(axis=1)
    alpha = (1.0 - confidence) / 2.0
    lower = float(np.quantile(boots, alpha))
    upper = float(np.quantile(boots, 1.0 - alpha))
    return CIResult(mean, std, n, lower, upper, "bootstrap")


_TIME_UNITS = ((1e-6, 1e9, "ns"), (1e-3, 1e6, "µs"), (1.0, 1e3, "ms"))


def human_time(seconds: float) -> str:
    if not isinstance(seconds, (int, float)) or not math.isfinite(seconds):
        return "—"
    for bound, scale, unit in _TIME_UNITS:
        if seconds < bound:
            return f"{seconds * scale:.2f} {unit}"
    return f"{seconds:.3f} s"


def rank(values: List[float]) -> List[int]:
    """1-based ranks, smallest first. NaN values rank last."""
    indexed = list(enumerate(values))
    indexed.sort(key=lambda t: (not math.isfinite(t[1]), t[1] if math.isfinite(t[1]) else 0.0))
    ranks = [0] * len(values)
    for r, (orig_idx, _) in enumerate(indexed, start=1):
        ranks[orig_idx] = r
    return ranks
