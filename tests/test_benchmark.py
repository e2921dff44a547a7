from __future__ import annotations

import json
import math
import os
import random

import pytest

from sortscope import compare_algorithms
from sortscope.benchmark import INPUT_KINDS, build_input


def test_compare_algorithms_report(tmp_path):
    out = tmp_path / "report.html"
    js = tmp_path / "nested" / "report.json"
    res = compare_algorithms(
        ns=[20, 40, 80],
        repeats=3,
        seed=7,
        html_out=str(out),
        json_out=str(js),
        title="Test Report",
        notes="<b>escaped</b>",
        verbose=False,
    )
    assert out.exists()
    assert js.exists()
    assert res.html_path == os.path.abspath(out)
    assert "Runtime Benchmarks" in res.html
    assert "Test Report" in res.html
    assert "&lt;b&gt;escaped&lt;/b&gt;" in res.html
    assert set(res.stats) == {"Bubble Sort", "Quick Sort"}
    for s in res.stats.values():
        assert not s.errors
        assert all(len(s.times[n]) == 3 for n in res.ns)
        assert all(math.isfinite(s.time_ci[n].mean) for n in res.ns)
        assert s.summary

    payload = json.loads(js.read_text(encoding="utf-8"))
    assert payload["title"] == "Test Report"
    assert payload["ns"] == [20, 40, 80]
    assert set(payload["algorithms"]) == {"Bubble Sort", "Quick Sort"}
    assert len(payload["algorithms"]["Quick Sort"]["times_raw"]["40"]) == 3


def test_compare_algorithms_without_report():
    res = compare_algorithms(ns=[10, 20], repeats=2, html_out=None, verbose=False, ci_method="bootstrap")
    assert res.html is None
    assert res.html_path is None
    assert res.stats["Quick Sort"].time_ci[20].method == "bootstrap"


def test_sorted_input_records_recursion_failures(tmp_path):
    res = compare_algorithms(
        ns=[50, 3000],
        repeats=1,
        warmup=0,
        input_kind="sorted",
        html_out=str(tmp_path / "r.html"),
        verbose=False,
    )
    quick = res.stats["Quick Sort"]
    assert any("recursion" in e for e in quick.errors)
    assert math.isnan(quick.times[3000][0])
    assert math.isfinite(quick.times[50][0])
    assert not res.stats["Bubble Sort"].errors
    assert "recursion limit exceeded" in res.html


def test_verbose_prints_progress(capsys):
    compare_algorithms(ns=[5, 10], repeats=1, html_out=None, verbose=True)
    out = capsys.readouterr().out
    assert "Benchmarking" in out
    assert "Bubble Sort:" in out


@pytest.mark.parametrize("kwargs", [
    {"ns": []},
    {"ns": [0, 10]},
    {"ns": [10, 2.5]},
    {"ns": (10, 20)},
    {"ns": [10], "repeats": 0},
    {"ns": [10], "input_kind": "zigzag"},
    {"ns": [10], "ci_method": "z"},
    {"ns": [10], "confidence": 1.5},
])
def test_compare_algorithms_validation(kwargs):
    with pytest.raises(ValueError):
        compare_algorithms(html_out=None, verbose=False, **kwargs)


@pytest.mark.parametrize("kind", INPUT_KINDS)
def test_build_input_kinds(kind):
    data = build_input(30, kind, random.Random(0))
    assert len(data) == 30
    if kind == "sorted":
        assert data == sorted(data)
    if kind == "reversed":
        assert data == sorted(data, reverse=True)
    if kind == "few_unique":
        assert set(data) <= set(range(5))


def test_build_input_is_seeded():
    assert build_input(25, "random", random.Random(3)) == build_input(25, "random", random.Random(3))


def test_bootstrap_seed_zero_is_used(monkeypatch):
    import sortscope.benchmark as benchmark

    seeds = []
    real = benchmark.bootstrap_confidence_interval

    def spy(samples, confidence, seed):
        seeds.append(seed)
        return real(samples, confidence, seed=seed)

    monkeypatch.setattr(benchmark, "bootstrap_confidence_interval", spy)
    compare_algorithms(ns=[5, 10], repeats=2, seed=0, ci_method="bootstrap", html_out=None, verbose=False)
    assert seeds and set(seeds) == {0}
