"""Static routes: a mutable builder and the frozen Route it produces.

A route maps one exact request path to one file on disk::

    route = (
        Route.new_builder()
        .when_requested("robots.txt")
        .provide("static/robots.txt")
        .with_header("Cache-Control: max-age=86400")
        .build(web_root="public")
    )

``build()`` checks that the file exists, so a route that made it into a
table never points at a missing file (at least not at startup).
"""

from __future__ import annotations

import logging
import mimetypes
import string
from dataclasses import dataclass
from pathlib import Path

from wren.errors import ConfigurationError, InvalidStateError
from wren.http.response import Response

logger = logging.getLogger("wren.routing")

# RFC 9110 token characters allowed in a header name
_TOKEN_CHARS = frozenset(string.ascii_letters + string.digits + "!#$%&'*+-.^_`|~")

# Set by the sender from the body; a route may not override it
_COMPUTED_HEADERS = frozenset({"content-length"})


@dataclass(frozen=True, slots=True)
class Route:
    """A validated static route. Only built routes can be matched.

    ``request_path`` is an opaque key compared by exact string equality:
    no slash stripping, no case folding, no percent-decoding.
    ``resolve_path`` is the absolute file path checked at build time.
    """

    request_path: str
    resolve_path: Path
    header: str | None = None

    @staticmethod
    def new_builder() -> RouteBuilder:
        """Start configuring a new route."""
        return RouteBuilder()

    @property
    def header_pair(self) -> tuple[str, str] | None:
        """The header split into ``(name, value)``, or ``None`` if unset or blank."""
        if self.header is None or not self.header.strip():
            return None
        return _split_header(self.header)

    def matches(self, requested_path: str) -> bool:
        """Exact string comparison against the request path."""
        return self.request_path == requested_path

    def serve(self) -> Response:
        """Read the file and build the response for this route.

        The content type is guessed from the file name. A route header
        named ``Content-Type`` replaces the guess instead of adding a
        second header.
        """
        body = self.resolve_path.read_bytes()
        content_type, _ = mimetypes.guess_type(self.resolve_path.name)
        response = Response(body=body, content_type=content_type or "application/octet-stream")

        pair = self.header_pair
        if pair is not None:
            name, value = pair
            if name.lower() == "content-type":
                response = response.with_content_type(value)
            else:
                response = response.with_header(name, value)
        return response


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch: the route and what it served."""

    route: Route
    response: Response
    served: bool = True


class RouteBuilder:
    """Mutable route configuration. Single use: ``build()`` seals it.

    Every setter returns the builder so calls can be chained. Calling a
    setter or ``build()`` again after a successful ``build()`` raises
    ``InvalidStateError``.
    """

    __slots__ = ("_built", "_header", "_request", "_resolve")

    def __init__(self) -> None:
        self._request: str | None = None
        self._resolve: str | Path | None = None
        self._header: str | None = None
        self._built = False

    @property
    def is_built(self) -> bool:
        return self._built

    def when_requested(self, path: str) -> RouteBuilder:
        """Set the request path to answer. Do not include a leading or trailing slash."""
        self._check_not_built()
        self._request = path
        return self

    def provide(self, file_path: str | Path) -> RouteBuilder:
        """Set the file to serve.

        Relative paths are resolved against the web root given to
        ``build()``. Parent directories are allowed (``"../shared/a.txt"``).
        """
        self._check_not_built()
        self._resolve = file_path
        return self

    def with_header(self, header: str) -> RouteBuilder:
        """Set a single optional header, as ``"Name: value"``."""
        self._check_not_built()
        self._header = header
        return self

    def build(self, web_root: str | Path | None = None) -> Route:
        """Validate the configuration and return the frozen ``Route``.

        Raises ``ConfigurationError`` if the request path or file is unset,
        the file does not exist, or the header is malformed. A failed build
        can be corrected and retried.
        """
        self._check_not_built()
        if self._request is None:
            msg = "Route has no request path; call when_requested() before build()."
            raise ConfigurationError(msg)
        if self._resolve is None:
            msg = f"Route {self._request!r} has no file; call provide() before build()."
            raise ConfigurationError(msg)

        file_path = Path(self._resolve)
        if not file_path.is_absolute():
            file_path = Path(web_root if web_root is not None else ".") / file_path
        file_path = file_path.resolve()
        if not file_path.is_file():
            msg = f"The file '{self._resolve}' doesn't exist (resolved to {file_path})."
            raise ConfigurationError(msg)

        header = self._header
        if header is not None and header.strip():
            _split_header(header)

        self._built = True
        route = Route(request_path=self._request, resolve_path=file_path, header=header)
        logger.debug("built route %r -> %s", route.request_path, route.resolve_path)
        return route

    def _check_not_built(self) -> None:
        if self._built:
            msg = f"Route {self._request!r} is already built; create a new builder."
            raise InvalidStateError(msg)


def _split_header(header: str) -> tuple[str, str]:
    """Split ``"Name: value"``. Raises ``ConfigurationError`` if malformed.

    The pair must be sendable as-is: the name an HTTP token, the value
    latin-1 with no line breaks.
    """
    name, sep, value = header.partition(":")
    name = name.strip()
    value = value.strip()
    if not sep or not name or not set(name) <= _TOKEN_CHARS:
        msg = f"Malformed header {header!r}; expected 'Name: value'."
        raise ConfigurationError(msg)
    if name.lower() in _COMPUTED_HEADERS:
        msg = f"Header {name!r} is computed when the file is served; remove it from the route."
        raise ConfigurationError(msg)
    if any(ch in value for ch in "\r\n\0"):
        msg = f"Header value for {name!r} contains a line break or NUL."
        raise ConfigurationError(msg)
    try:
        value.encode("latin-1")
    except UnicodeEncodeError as exc:
        msg = f"Header value for {name!r} is not latin-1 encodable: {value!r}"
        raise ConfigurationError(msg) from exc
    return name, value
