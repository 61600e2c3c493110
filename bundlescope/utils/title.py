"""Report title helpers."""

from datetime import datetime

from bundlescope.schemas.options import ReportTitle


def default_title() -> str:
    """Title stamped with the time the report is rendered."""
    return f"bundlescope [{datetime.now():%d %b %Y at %H:%M}]"


def resolve_title(report_title: ReportTitle) -> str:
    """Resolve a literal title or call a title factory; None falls back to ``default_title``."""
    if report_title is None:
        return default_title()
    if callable(report_title):
        return report_title()
    return report_title
