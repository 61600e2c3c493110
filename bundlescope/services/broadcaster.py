"""Viewer connection registry and best-effort push of chart data updates.

Delivery carries no guarantee: each send is a fire-and-forget task, there is
no acknowledgment or retry, and connections that are not open are skipped.
Viewers that miss an update see the current data on their next page load.
"""

import asyncio
import enum
import json
import logging
from typing import Any, Set

from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState
from uvicorn.protocols.utils import ClientDisconnected

CHART_DATA_UPDATED = "chartDataUpdated"


class TransportErrorKind(enum.Enum):
    SUPPRESSED = "suppressed"
    LOGGABLE = "loggable"


def classify_transport_error(exc: BaseException) -> TransportErrorKind:
    """Disconnects are expected noise: errno-bearing network failures (ECONNRESET, EPIPE)
    and the disconnect errors Starlette and uvicorn raise when a viewer goes away.
    """
    if isinstance(exc, (WebSocketDisconnect, ClientDisconnected)):
        return TransportErrorKind.SUPPRESSED
    if getattr(exc, "errno", None):
        return TransportErrorKind.SUPPRESSED
    return TransportErrorKind.LOGGABLE


def build_update_message(chart_data: Any) -> str:
    return json.dumps({"event": CHART_DATA_UPDATED, "data": chart_data})


class ConnectionRegistry:
    """Tracks the open viewer sockets of one live server."""

    def __init__(self, logger: logging.Logger):
        self.clients: Set[WebSocket] = set()
        self._logger = logger
        self._pending: Set[asyncio.Task] = set()

    def add(self, websocket: WebSocket) -> None:
        self.clients.add(websocket)

    def discard(self, websocket: WebSocket) -> None:
        self.clients.discard(websocket)

    def handle_error(self, exc: BaseException) -> None:
        if classify_transport_error(exc) is TransportErrorKind.LOGGABLE:
            self._logger.info("%s", exc)

    @staticmethod
    def is_open(websocket: WebSocket) -> bool:
        return (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        )

    def broadcast(self, message: str) -> int:
        """Schedule ``message`` on every open connection; returns how many sends were scheduled."""
        scheduled = 0
        for websocket in list(self.clients):
            if not self.is_open(websocket):
                continue
            task = asyncio.create_task(self._send(websocket, message))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
            scheduled += 1
        return scheduled

    async def _send(self, websocket: WebSocket, message: str) -> None:
        try:
            await websocket.send_text(message)
        except Exception as exc:
            self.handle_error(exc)

    async def drain(self) -> None:
        """Wait for sends already scheduled; used on shutdown."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
