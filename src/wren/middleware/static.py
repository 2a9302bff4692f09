"""Static route middleware.

Runs the request path through a ``RouteTable``. A hit is served and the
rest of the pipeline is skipped; a miss falls through to the next handler.
"""

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.routing.table import RouteTable


class StaticRoutes:
    """Middleware that serves exact-match static routes.

    Route keys carry no leading slash, so the single leading ``/`` of the
    request path is removed before the table lookup; nothing else is
    normalized. ``/a/b`` hits ``"a/b"``, while ``/a/b/`` and ``//a/b``
    do not.

    Usage::

        table = RouteTable(web_root="public")
        table.static("robots.txt", "robots.txt", header="Cache-Control: no-cache")
        app.add_middleware(StaticRoutes(table))
    """

    __slots__ = ("_table",)

    def __init__(self, table: RouteTable) -> None:
        self._table = table

    async def __call__(self, request: Request, next: Next) -> Response:
        """Serve a static route or fall through."""
        # Only serve GET and HEAD
        if request.method not in ("GET", "HEAD"):
            return await next(request)

        path = request.path
        if path.startswith("/"):
            path = path[1:]

        match = self._table.dispatch(path)
        if match is None:
            return await next(request)
        return match.response
