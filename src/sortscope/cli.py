"""Command line interface for the sortscope benchmark."""

from __future__ import annotations

import argparse
import logging
import sys

from .benchmark import INPUT_KINDS, compare_algorithms

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sortscope-bench",
        description="Benchmark bubble sort against quick sort and write a report",
    )
    parser.add_argument("--sizes", type=int, nargs="+", default=[100, 200, 400, 800], help="Input sizes n")
    parser.add_argument("--repeats", type=int, default=5)
    parser.add_argument("--warmup", type=int, default=1)
    parser.add_argument("--kind", choices=INPUT_KINDS, default="random", help="Shape of the generated input")
    parser.add_argument("--ci", choices=("t", "bootstrap"), default="t", help="Confidence interval method")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--early-exit", action="store_true", help="Stop bubble sort after a pass with no swaps")
    parser.add_argument("--html-out", default="sortscope_report.html")
    parser.add_argument("--no-html", action="store_true", help="Skip the HTML report")
    parser.add_argument("--json-out", default=None)
    parser.add_argument("--title", default="Bubble Sort vs. Quick Sort")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if any(n <= 0 for n in args.sizes):
        parser.error("--sizes must be positive integers")
    if args.repeats < 1:
        parser.error("--repeats must be at least 1")

    result = compare_algorithms(
        ns=args.sizes,
        repeats=args.repeats,
        warmup=args.warmup,
        input_kind=args.kind,
        ci_method=args.ci,
        seed=args.seed,
        html_out=None if args.no_html else args.html_out,
        json_out=args.json_out,
        title=args.title,
        early_exit=args.early_exit,
        verbose=True,
    )
    for label, stats in result.stats.items():
        if stats.errors:
            logger.info("%s: %d failed size(s), see report", label, len(stats.errors))
    if args.json_out:
        print(f"JSON written to: {args.json_out}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
