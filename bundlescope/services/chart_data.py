"""Chart data acquisition shared by the live server and the report writers.

Every delivery mode goes through ``get_chart_data``. It never raises: analysis
failures and empty results are logged and collapse to ``None``, and callers
abort whatever they were about to do (start a server, write a file, broadcast
an update) when they receive it.
"""

import traceback
from pathlib import Path
from typing import Any, Callable, Optional, Union

from bundlescope.schemas.options import AnalyzerOptions
from bundlescope.services.analyzer import ChartData, get_viewer_data

ANALYSIS_FAILED_MESSAGE = "Couldn't analyze webpack bundle"
NO_BUNDLES_MESSAGE = "Couldn't find any javascript bundles in provided stats file"


def get_chart_data(
    analyzer_opts: AnalyzerOptions,
    bundle_stats: Any,
    bundle_dir: Union[str, Path, None],
    *,
    analyzer: Optional[Callable[..., Any]] = None,
) -> Optional[ChartData]:
    """Run the analyzer and normalize its outcome.

    Args:
        analyzer_opts: Logger and asset exclusion for this acquisition
        bundle_stats: Raw bundler stats, passed through untouched
        bundle_dir: Directory holding the emitted bundles, or None
        analyzer: Replacement for ``get_viewer_data`` with the same signature

    Returns:
        Chart data, or None when the stats could not be analyzed or held no bundles
    """
    logger = analyzer_opts.logger
    analyze = analyzer or get_viewer_data

    try:
        chart_data = analyze(bundle_stats, bundle_dir, analyzer_opts)
    except Exception as exc:
        logger.error("%s:\n%s", ANALYSIS_FAILED_MESSAGE, exc)
        logger.debug("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        chart_data = None

    # A build with no bundles is almost always a misconfigured stats file
    if isinstance(chart_data, dict) and not chart_data:
        logger.error(NO_BUNDLES_MESSAGE)
        chart_data = None

    return chart_data
