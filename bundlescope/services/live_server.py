"""Live dashboard server.

``start_server`` acquires chart data once, then serves it over HTTP and keeps
viewers current over a WebSocket on the same listener. The returned handle's
``update_chart_data`` re-runs the analysis; a failed re-analysis leaves the
running dashboard exactly as it was.
"""

import asyncio
import contextlib
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

import uvicorn

from bundlescope.schemas.options import AnalyzerOptions, ReportTitle, ServerOptions, SizeMetric
from bundlescope.services.analyzer import ChartData
from bundlescope.services.broadcaster import ConnectionRegistry, build_update_message
from bundlescope.services.chart_data import get_chart_data
from bundlescope.utils.browser import open_browser

STARTUP_POLL_SECONDS = 0.01


@dataclass
class ServerState:
    """State owned by one live server; ``chart_data`` is only ever replaced whole."""

    chart_data: ChartData
    analyzer_options: AnalyzerOptions
    bundle_dir: Optional[Path]
    connections: ConnectionRegistry
    report_title: ReportTitle = None
    default_sizes: SizeMetric = "parsed"
    analyzer: Optional[Callable[..., Any]] = None
    loop: Optional[asyncio.AbstractEventLoop] = None

    def update_chart_data(self, bundle_stats: Any) -> bool:
        """Re-analyze and push the result to open viewers.

        Safe to call from another thread: the new data is installed and
        broadcast on the server's event loop.

        Returns:
            True when new chart data was accepted
        """
        new_chart_data = get_chart_data(
            self.analyzer_options, bundle_stats, self.bundle_dir, analyzer=self.analyzer
        )
        if new_chart_data is None:
            return False

        if self.loop is None or _running_loop() is self.loop:
            self._install(new_chart_data)
        else:
            self.loop.call_soon_threadsafe(self._install, new_chart_data)
        return True

    def _install(self, chart_data: ChartData) -> None:
        self.chart_data = chart_data
        self.connections.broadcast(build_update_message(chart_data))


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


@dataclass
class ServerHandle:
    """What ``start_server`` hands back to its caller."""

    state: ServerState
    http: uvicorn.Server
    url: str
    port: int
    _task: asyncio.Task = field(repr=False)

    @property
    def ws(self) -> ConnectionRegistry:
        return self.state.connections

    def update_chart_data(self, bundle_stats: Any) -> None:
        self.state.update_chart_data(bundle_stats)

    async def wait_closed(self) -> None:
        await self._task

    async def stop(self) -> None:
        await self.ws.drain()
        self.http.should_exit = True
        await self._task


class _EmbeddedServer(uvicorn.Server):
    """uvicorn server that leaves process signal handling to the caller."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield


def _bind_socket(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.create_server((host, port), family=family)
    sock.set_inheritable(True)
    return sock


async def start_server(bundle_stats: Any, **options: Any) -> Optional[ServerHandle]:
    """Start the live dashboard.

    Args:
        bundle_stats: Raw bundler stats
        **options: Fields of ``ServerOptions``

    Returns:
        Server handle, or None when no chart data could be produced (nothing is bound)
    """
    from bundlescope.main import create_app

    opts = ServerOptions(**options)
    logger = opts.logger
    analyzer_options = opts.analyzer_options()

    chart_data = get_chart_data(analyzer_options, bundle_stats, opts.bundle_dir, analyzer=opts.analyzer)
    if chart_data is None:
        return None

    state = ServerState(
        chart_data=chart_data,
        analyzer_options=analyzer_options,
        bundle_dir=opts.bundle_dir,
        connections=ConnectionRegistry(logger),
        report_title=opts.report_title,
        default_sizes=opts.default_sizes,
        analyzer=opts.analyzer,
        loop=asyncio.get_running_loop(),
    )
    app = create_app(state)

    sock = _bind_socket(opts.host, opts.port)
    port = sock.getsockname()[1]
    config = uvicorn.Config(app, log_config=None, lifespan="off", access_log=False)
    server = _EmbeddedServer(config)
    task = asyncio.create_task(server.serve(sockets=[sock]))

    while not server.started:
        if task.done():
            sock.close()
            # Surface whatever stopped uvicorn from starting
            task.result()
            raise RuntimeError("Live server exited during startup")
        await asyncio.sleep(STARTUP_POLL_SECONDS)

    url_host = f"[{opts.host}]" if ":" in opts.host else opts.host
    url = f"http://{url_host}:{port}"
    logger.info("bundlescope is started at %s\nUse Ctrl+C to close it", url)

    if opts.open_browser:
        open_browser(url, logger)

    return ServerHandle(state=state, http=server, url=url, port=port, _task=task)


# Deprecated alias kept for callers of the old name
start = start_server
