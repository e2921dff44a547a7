#!/usr/bin/env python3
"""
Bubble Sort vs. Quick Sort
==========================

Runs the benchmark on every input shape and writes one HTML report per
shape into examples/reports/. On sorted and reversed input the quick sort's
last-element pivot degrades to O(n^2) and, for large n, exceeds the
recursion limit; those runs show up as errors in the report.
"""

from __future__ import annotations

import os
import sys

# Add src to path for development
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_PATH = os.path.join(REPO_ROOT, "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from sortscope import compare_algorithms
from sortscope.benchmark import INPUT_KINDS


if __name__ == "__main__":
    out_dir = os.path.join(REPO_ROOT, "examples", "reports")
    os.makedirs(out_dir, exist_ok=True)

    for kind in INPUT_KINDS:
        compare_algorithms(
            ns=[100, 200, 400, 800, 1600],
            repeats=5,
            input_kind=kind,
            seed=2024,
            html_out=os.path.join(out_dir, f"{kind}.html"),
            json_out=os.path.join(out_dir, f"{kind}.json"),
            title=f"Bubble Sort vs. Quick Sort ({kind} input)",
        )
