"""Cache-control middleware for the live dashboard."""

from starlette.middleware.base import BaseHTTPMiddleware


class NoCacheMiddleware(BaseHTTPMiddleware):
    """Keep browsers from reusing a stale page after the chart data changes."""

    async def dispatch(self, request, call_next):
        response = await call_next(request)

        response.headers["Cache-Control"] = "no-store"

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        return response
