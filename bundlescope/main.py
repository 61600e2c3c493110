"""FastAPI application factory for the live dashboard."""

from fastapi import FastAPI
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from bundlescope.middleware import NoCacheMiddleware
from bundlescope.routes import viewer as viewer_module
from bundlescope.services.live_server import ServerState


def create_app(state: ServerState) -> FastAPI:
    """Build an app bound to one server's state; each live server gets its own."""
    app = FastAPI(
        title="bundlescope",
        description="Bundle size dashboard",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.viewer = state

    # Unknown paths and methods get a bare 404
    @app.exception_handler(StarletteHTTPException)
    async def empty_not_found(request, exc):
        if exc.status_code in (404, 405):
            return Response(status_code=404)
        return await http_exception_handler(request, exc)

    app.add_middleware(NoCacheMiddleware)
    app.include_router(viewer_module.router)
    return app
