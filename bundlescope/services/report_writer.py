"""One-shot report writers: a self-contained HTML snapshot and a JSON dump of the chart data."""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

from bundlescope.schemas.options import JSONReportOptions, ReportOptions
from bundlescope.services.chart_data import get_chart_data
from bundlescope.services.template import render_viewer
from bundlescope.utils.browser import open_browser
from bundlescope.utils.title import resolve_title


def serialize_chart_data(chart_data: Any) -> str:
    """Compact, deterministic JSON for the chart data."""
    return json.dumps(chart_data, separators=(",", ":"), ensure_ascii=False)


async def generate_report(bundle_stats: Any, **options: Any) -> Optional[Path]:
    """Write a static HTML report.

    Args:
        bundle_stats: Raw bundler stats
        **options: Fields of ``ReportOptions``; ``report_filename`` is required

    Returns:
        Absolute path of the written report, or None when no chart data could be produced
    """
    opts = ReportOptions(**options)
    logger = opts.logger

    chart_data = get_chart_data(
        opts.analyzer_options(), bundle_stats, opts.bundle_dir, analyzer=opts.analyzer
    )
    if chart_data is None:
        return None

    report_html = render_viewer(
        mode="static",
        title=resolve_title(opts.report_title),
        chart_data=chart_data,
        default_sizes=opts.default_sizes,
        enable_websocket=False,
    )
    base_dir = opts.bundle_dir or Path.cwd()
    report_path = (base_dir / opts.report_filename).resolve()

    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(report_html, encoding="utf-8")

    logger.info("bundlescope saved report to %s", report_path)

    if opts.open_browser:
        open_browser(report_path.as_uri(), logger)

    return report_path


async def generate_json_report(bundle_stats: Any, **options: Any) -> Optional[Path]:
    """Write the chart data as JSON.

    Relative ``report_filename`` values resolve against the current working
    directory, not ``bundle_dir``.

    Returns:
        Absolute path of the written file, or None when no chart data could be produced
    """
    opts = JSONReportOptions(**options)
    logger = opts.logger

    chart_data = get_chart_data(
        opts.analyzer_options(), bundle_stats, opts.bundle_dir, analyzer=opts.analyzer
    )
    if chart_data is None:
        return None

    report_path = opts.report_filename.resolve()
    payload = serialize_chart_data(chart_data)

    await asyncio.to_thread(report_path.parent.mkdir, parents=True, exist_ok=True)
    await asyncio.to_thread(report_path.write_text, payload, encoding="utf-8")

    logger.info("bundlescope saved JSON report to %s", report_path)
    return report_path
