"""Middleware pipeline: protocol and the built-in static route layer."""

from wren.middleware.protocol import Middleware, Next
from wren.middleware.static import StaticRoutes

__all__ = ["Middleware", "Next", "StaticRoutes"]
