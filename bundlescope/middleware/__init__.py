"""Middleware package."""

from bundlescope.middleware.no_cache import NoCacheMiddleware

__all__ = ["NoCacheMiddleware"]
