"""Render the viewer document around a chart data payload."""

import json
from functools import lru_cache
from typing import Any, Literal

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from bundlescope.config import STATIC_DIR, TEMPLATES_DIR

ViewerMode = Literal["server", "static"]


def script_json(value: Any) -> Markup:
    """Serialize ``value`` for an inline <script>; ``<`` is escaped so the payload cannot close the tag."""
    return Markup(json.dumps(value).replace("<", "\\u003c"))


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        keep_trailing_newline=True,
    )
    env.filters["script_json"] = script_json
    return env


@lru_cache(maxsize=1)
def get_viewer_script() -> str:
    """Client script served at /viewer.js and inlined into static reports."""
    return (STATIC_DIR / "viewer.js").read_text(encoding="utf-8")


def render_viewer(
    *,
    mode: ViewerMode,
    title: str,
    chart_data: Any,
    default_sizes: str,
    enable_websocket: bool,
) -> str:
    template = _environment().get_template("viewer.html")
    return template.render(
        mode=mode,
        title=title,
        chart_data=chart_data,
        default_sizes=default_sizes,
        enable_websocket=enable_websocket,
        viewer_script=Markup(get_viewer_script()) if mode == "static" else None,
    )
