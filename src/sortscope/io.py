# src/sortscope/io.py
from __future__ import annotations

import json
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .utils import human_time

if TYPE_CHECKING:
    from .benchmark import BenchmarkResult


def _num(x: Any) -> Any:
    # JSON has no NaN; failed samples are written as null
    if isinstance(x, float) and not math.isfinite(x):
        return None
    return x


def export_results_json(result: BenchmarkResult, out_path: str | Path) -> None:
    """
    Write the benchmark as JSON: raw samples, per-size confidence intervals,
    scaling summaries and recorded errors for each algorithm.
    """
    out_path = Path(out_path)
    data: dict[str, Any] = {
        "title": result.title,
        "html_path": result.html_path,
        "input_kind": result.input_kind,
        "ns": result.ns,
        "algorithms": {},
    }

    for label, s in result.stats.items():
        time_ci = {str(n): {
            "mean": _num(ci.mean),
            "std": _num(ci.std),
            "n": ci.n,
            "lower": _num(ci.lower),
            "upper": _num(ci.upper),
            "method": ci.method,
            "mean_human": human_time(ci.mean),
        } for n, ci in s.time_ci.items()}

        data["algorithms"][label] = {
            "label": label,
            "times_raw": {str(n): [_num(t) for t in ts] for n, ts in s.times.items()},
            "time_ci": time_ci,
            "slope": s.slope,
            "summary": s.summary,
            "errors": s.errors,
        }

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
