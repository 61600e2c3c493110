"""
Command line entry point.

Usage:
  bundlescope path/to/stats.json [bundle_dir] [--mode server|static|json] [options]

Notes:
- bundle_dir defaults to the directory holding the stats file; when the emitted
  bundles are there, parsed and gzip sizes are reported too.
- Defaults for host, port, sizes and log level come from BUNDLESCOPE_* settings.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Sequence

from bundlescope.config import settings
from bundlescope.logging_config import get_logger, setup_logging
from bundlescope.services.live_server import start_server
from bundlescope.services.report_writer import generate_json_report, generate_report
from bundlescope.services.stats_watcher import StatsFileWatcher, load_stats_file

MODES = ("server", "static", "json")
SIZES = ("stat", "parsed", "gzip")
LOG_LEVELS = ("debug", "info", "warn", "error", "silent")


def parse_port(value: str) -> int:
    """Port number, or "auto" for an ephemeral port."""
    if value == "auto":
        return 0
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlescope",
        description="Visualize the size of bundles described by a bundler stats file.",
        add_help=False,
    )
    parser.add_argument("stats_file", help="Path to the bundler stats JSON file")
    parser.add_argument(
        "bundle_dir",
        nargs="?",
        default=None,
        help="Directory holding the emitted bundles (default: the stats file's directory)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=MODES,
        default="server",
        help="server: live dashboard; static: HTML file; json: JSON file (default: server)",
    )
    parser.add_argument("-h", "--host", default=settings.host, help=f"Host to bind (default: {settings.host})")
    parser.add_argument(
        "-p",
        "--port",
        type=parse_port,
        default=settings.port,
        help=f'Port to bind, or "auto" for any free port (default: {settings.port})',
    )
    parser.add_argument(
        "-r",
        "--report",
        default=None,
        help=f"Report file for static/json modes (default: {settings.report_filename} / "
        f"{settings.json_report_filename})",
    )
    parser.add_argument("-t", "--title", default=None, help="Report title (default: tool name and time)")
    parser.add_argument(
        "-s",
        "--default-sizes",
        choices=SIZES,
        default=settings.default_sizes,
        help=f"Size metric shown first (default: {settings.default_sizes})",
    )
    parser.add_argument(
        "-O",
        "--no-open",
        dest="open_browser",
        action="store_false",
        default=settings.open_browser,
        help="Don't open the report in the default browser",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        help="Regex of assets to leave out of the report; repeatable",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help=f"Log level (default: {settings.log_level.lower()})",
    )
    parser.add_argument(
        "-w",
        "--watch",
        action="store_true",
        help="Server mode: refresh the dashboard whenever the stats file changes",
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    return parser


async def run(args: argparse.Namespace) -> int:
    logger = get_logger("viewer")
    stats_path = Path(args.stats_file).resolve()

    try:
        bundle_stats = load_stats_file(stats_path)
    except (OSError, ValueError) as exc:
        logger.error("Couldn't read webpack bundle stats from %s:\n%s", stats_path, exc)
        return 1

    bundle_dir = Path(args.bundle_dir).resolve() if args.bundle_dir else stats_path.parent
    common = {
        "bundle_dir": bundle_dir,
        "logger": logger,
        "exclude_assets": args.exclude,
    }

    if args.mode == "static":
        written = await generate_report(
            bundle_stats,
            report_filename=args.report or settings.report_filename,
            report_title=args.title,
            default_sizes=args.default_sizes,
            open_browser=args.open_browser,
            **common,
        )
        return 0 if written else 1

    if args.mode == "json":
        written = await generate_json_report(
            bundle_stats,
            report_filename=args.report or settings.json_report_filename,
            **common,
        )
        return 0 if written else 1

    handle = await start_server(
        bundle_stats,
        host=args.host,
        port=args.port,
        open_browser=args.open_browser,
        default_sizes=args.default_sizes,
        report_title=args.title,
        **common,
    )
    if handle is None:
        return 1

    watcher = None
    if args.watch:
        watcher = StatsFileWatcher(stats_path, handle.update_chart_data, settings.watch_interval_seconds)
        await watcher.start()
    try:
        await handle.wait_closed()
    finally:
        if watcher is not None:
            await watcher.stop()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
