# src/sortscope/plotting.py
from __future__ import annotations

from typing import Dict, List, Tuple

import numpy as np
import plotly.graph_objects as go

_COLORS = [
    '#4285f4',  # blue
    '#ea4335',  # red
    '#34a853',  # green
    '#fbbc04',  # yellow
]

_REF_COLORS = ['#64748b', '#94a3b8', '#cbd5e1', '#e2e8f0']


def _reference_funcs():
    return {
        "1": lambda n: np.ones_like(n, dtype=float),
        "logn": lambda n: np.log2(np.maximum(n, 2)),
        "n": lambda n: n.astype(float),
        "nlogn": lambda n: n.astype(float) * np.log2(np.maximum(n, 2)),
        "n**2": lambda n: n.astype(float) ** 2,
    }


def _eval_custom_curve(expr: str):
    """
    Evaluate simple expressions like 'n**3' or 'n*log2(n)' over a numpy array
    with a minimal namespace.
    """
    def f(n: np.ndarray) -> np.ndarray:
        local_ns = {"n": n.astype(float), "np": np, "log": np.log, "log2": np.log2}
        return np.asarray(eval(expr, {"__builtins__": {}}, local_ns), dtype=float)
    return f


def build_reference_curves(
    ns: List[int],
    ref_specs: Tuple[str, ...],
    y_anchor: float,
    normalize_at: str = "max",
) -> Dict[str, np.ndarray]:
    """
    Returns dict: name -> np.ndarray of values scaled so that each curve
    passes through `y_anchor` at the smallest or largest n.
    """
    n_arr = np.array(ns, dtype=float)
    funcs = _reference_funcs()
    curves = {}

    if not np.isfinite(y_anchor) or y_anchor <= 0:
        y_anchor = 1.0

    idx = 0 if normalize_at == "min" else len(n_arr) - 1
    for spec in ref_specs:
        if spec in funcs:
            raw = funcs[spec](n_arr)
        else:
            raw = _eval_custom_curve(spec)(n_arr)
        raw = np.maximum(raw, 1e-12)
        if np.isfinite(raw[idx]) and raw[idx] != 0:
            scale = y_anchor / raw[idx]
        else:
            scale = 1.0
        curves[spec] = raw * scale
    return curves


def runtime_figure(
    ns: List[int],
    means: Dict[str, List[float]],
    lowers: Dict[str, List[float]],
    uppers: Dict[str, List[float]],
    reference_curves: Dict[str, np.ndarray],
    title: str,
) -> go.Figure:
    x = ns
    fig = go.Figure()

    for i, (label, y_mean) in enumerate(means.items()):
        color = _COLORS[i % len(_COLORS)]
        # upper band
        fig.add_trace(go.Scatter(
            x=x, y=uppers[label], line=dict(width=0), hoverinfo="skip", showlegend=False,
        ))
        # lower band, filled up to the previous trace
        fig.add_trace(go.Scatter(
            x=x, y=lowers[label], fill="tonexty", line=dict(width=0),
            name=f"{label} CI", hoverinfo="skip", showlegend=False,
            fillcolor=color, opacity=0.2,
        ))
        fig.add_trace(go.Scatter(
            x=x, y=y_mean, mode="lines+markers", name=label,
            marker=dict(size=8, color=color, line=dict(width=2, color='white')),
            line=dict(width=3, color=color),
            hovertemplate=f"<b>{label}</b><br>" +
                          "Input size: %{x}<br>" +
                          "Time: %{y:.6f}s<br>" +
                          "<extra></extra>",
        ))

    for i, (rname, ry) in enumerate(reference_curves.items()):
        fig.add_trace(go.Scatter(
            x=x, y=list(ry), mode="lines", name=f"O({rname})",
            line=dict(dash="dot", width=2, color=_REF_COLORS[i % len(_REF_COLORS)]),
            opacity=0.7,
        ))

    fig.update_layout(
        title=dict(text=title + ": Runtime", x=0.5),
        xaxis_title="Input Size (n)",
        yaxis_title="Time (seconds)",
        hovermode="x unified",
        template="plotly_white",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0.01),
        margin=dict(l=80, r=40, t=100, b=80),
        height=600,
    )
    fig.update_xaxes(type="linear", showline=True, mirror=True)
    fig.update_yaxes(type="log", showline=True, mirror=True, tickformat=".1e")
    return fig
