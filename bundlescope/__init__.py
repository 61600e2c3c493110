"""Bundle size reports from bundler stats: a live dashboard, static HTML, or JSON."""

from bundlescope.services.live_server import ServerHandle, start, start_server
from bundlescope.services.report_writer import generate_json_report, generate_report

__version__ = "0.1.0"

__all__ = [
    "ServerHandle",
    "generate_json_report",
    "generate_report",
    "start",
    "start_server",
]
