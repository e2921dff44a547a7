# src/sortscope/report.py
from __future__ import annotations

import importlib.resources as pkg_resources
import json
import re
from typing import Any, Dict, List, Optional

import plotly.io as pio
from jinja2 import BaseLoader, Environment
from markupsafe import Markup, escape

from .utils import human_time


def load_template_text() -> str:
    """Load the Jinja2 report template shipped inside the package."""
    tmpl = pkg_resources.files("sortscope").joinpath("templates").joinpath("report.html.j2")
    return tmpl.read_text(encoding="utf-8")


def simple_markdown_to_html(text: str) -> Markup:
    """
    Convert a small subset of markdown to safe HTML:

    - **bold** -> <strong>, `code` -> <code>
    - lines starting with '- ' -> <ul><li>...</li></ul>
    - anything else -> <p>
    Everything is escaped first, so only the tags generated here survive.
    """
    if not text:
        return Markup("")

    out_lines: List[str] = []
    in_list = False
    for raw in text.strip().splitlines():
        line = str(escape(raw.strip()))
        line = re.sub(r"\*\*(.+?)\*\*", r"<strong>\1</strong>", line)
        line = re.sub(r"`(.+?)`", r"<code>\1</code>", line)
        if not line:
            if in_list:
                out_lines.append("</ul>")
                in_list = False
            continue
        if line.startswith("- "):
            if not in_list:
                out_lines.append("<ul>")
                in_list = True
            out_lines.append("<li>" + line[2:].strip() + "</li>")
            continue
        if in_list:
            out_lines.append("</ul>")
            in_list = False
        out_lines.append(f"<p>{line}</p>")

    if in_list:
        out_lines.append("</ul>")
    return Markup("\n".join(out_lines))


def fig_to_div(fig) -> str:
    # plotly.js is loaded once from the CDN by the template
    if fig is None:
        return ""
    return pio.to_html(fig, include_plotlyjs=False, full_html=False, default_width="100%")


def build_report_html(
    title: str,
    notes: Optional[str],
    ns: List[int],
    input_kind: str,
    runtime_table: List[Dict[str, Any]],
    comparison_rows: List[Dict[str, Any]],
    runtime_fig,
    summaries: Dict[str, str],
    methods_text: str,
    errors: Dict[str, List[str]],
    html_path: Optional[str] = None,
) -> str:
    """
    Render the benchmark report. Free text (notes, summaries, errors) is
    escaped here; the template itself does not autoescape because it also
    receives raw Plotly markup.
    """
    env = Environment(loader=BaseLoader())
    env.filters["human_time"] = human_time
    tpl = env.from_string(load_template_text())

    return tpl.render(
        title=escape(title),
        notes=escape(notes) if notes else None,
        ns=ns,
        input_kind=escape(input_kind),
        labels=[escape(label) for label in summaries],
        runtime_table=runtime_table,
        comparison_rows=comparison_rows,
        runtime_div=fig_to_div(runtime_fig),
        summaries={escape(k): escape(v) for k, v in summaries.items()},
        methods_html=simple_markdown_to_html(methods_text),
        errors={escape(k): [escape(e) for e in v] for k, v in errors.items() if v},
        html_path=escape(html_path) if html_path else None,
        runtime_table_json=json.dumps(runtime_table, default=str),
    )
