"""Viewer routes: the dashboard page, its client script, and the update socket."""

from fastapi import APIRouter, Depends, WebSocket
from fastapi.responses import HTMLResponse, Response
from starlette.requests import HTTPConnection

from bundlescope.services.live_server import ServerState
from bundlescope.services.template import get_viewer_script, render_viewer
from bundlescope.utils.title import resolve_title

router = APIRouter(tags=["viewer"])


def get_server_state(connection: HTTPConnection) -> ServerState:
    return connection.app.state.viewer


@router.get("/", response_class=HTMLResponse)
async def viewer_page(state: ServerState = Depends(get_server_state)):
    """Render the dashboard around the chart data current at request time."""
    html = render_viewer(
        mode="server",
        title=resolve_title(state.report_title),
        chart_data=state.chart_data,
        default_sizes=state.default_sizes,
        enable_websocket=True,
    )
    return HTMLResponse(content=html, status_code=200)


@router.get("/viewer.js")
async def viewer_script():
    return Response(content=get_viewer_script(), media_type="text/javascript")


@router.websocket("/")
async def viewer_socket(websocket: WebSocket, state: ServerState = Depends(get_server_state)):
    """Hold a viewer connection open so chart data updates can be pushed to it.

    Viewers never send anything meaningful; incoming frames are read and dropped.
    """
    connections = state.connections
    connections.add(websocket)
    try:
        await websocket.accept()
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except Exception as exc:
        connections.handle_error(exc)
    finally:
        connections.discard(websocket)
