"""Wren exception hierarchy.

Shared across the data layer, routing, the app, and middleware so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when setup-time configuration is invalid.

    Typically raised by ``RouteBuilder.build()`` when the file to serve
    does not exist. Fatal to the registration that raised it.
    """


class InvalidStateError(WrenError):
    """Raised when a single-use or frozen object is used out of order.

    Examples: reading a ``QueryResult`` that was already consumed,
    configuring a ``RouteBuilder`` after ``build()``, adding routes to a
    frozen ``RouteTable``.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code."""

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no static route or fallback handled the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
