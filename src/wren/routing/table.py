"""Ordered table of static routes with first-match-wins dispatch.

Routes are added during setup and the table is frozen before serving.
Registration order is priority order: duplicates are allowed and the
earlier route always wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from wren.errors import InvalidStateError
from wren.routing.route import Route, RouteMatch

logger = logging.getLogger("wren.routing")


def dispatch(requested_path: str, routes: Iterable[Route]) -> RouteMatch | None:
    """Serve the first route in *routes* that matches *requested_path*.

    Returns a ``RouteMatch`` carrying the served response, or ``None``
    when nothing matched. The caller stops processing the request on a
    match; this function never halts anything itself.
    """
    for route in routes:
        if route.matches(requested_path):
            logger.debug("static route hit %r -> %s", requested_path, route.resolve_path)
            return RouteMatch(route=route, response=route.serve())
    return None


class RouteTable:
    """Static route table.

    Usage::

        table = RouteTable(web_root="public")
        table.static("favicon.ico", "img/favicon.ico")
        table.add(Route.new_builder().when_requested("a").provide("a.txt").build("public"))
        table.freeze()
        match = table.dispatch("favicon.ico")

    Read-only after ``freeze()`` and safe to share across requests.
    """

    __slots__ = ("_frozen", "_routes", "web_root")

    def __init__(self, web_root: str | Path = ".") -> None:
        self.web_root = Path(web_root)
        self._routes: list[Route] = []
        self._frozen = False

    def add(self, route: Route) -> None:
        """Append a built route. Must be called before freeze()."""
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise InvalidStateError(msg)
        if not isinstance(route, Route):
            msg = f"Expected a built Route, got {type(route).__name__}; call build() first."
            raise TypeError(msg)
        self._routes.append(route)

    def static(
        self, request_path: str, file_path: str | Path, *, header: str | None = None
    ) -> Route:
        """Build a route against this table's web root and add it.

        Raises ``ConfigurationError`` (and adds nothing) if the file is missing.
        """
        builder = Route.new_builder().when_requested(request_path).provide(file_path)
        if header is not None:
            builder.with_header(header)
        route = builder.build(web_root=self.web_root)
        self.add(route)
        return route

    def freeze(self) -> None:
        """Make the table read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """All routes in registration order."""
        return tuple(self._routes)

    def dispatch(self, requested_path: str) -> RouteMatch | None:
        """First-match-wins dispatch over this table. See ``dispatch()``."""
        return dispatch(requested_path, self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
