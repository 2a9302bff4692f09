"""Wren — exact-match static routes and single-use query results.

Static routes::

    from wren import App, AppConfig

    app = App(AppConfig(web_root="public"))
    app.static("robots.txt", "robots.txt", header="Cache-Control: max-age=3600")

Query results (async SQLite)::

    from wren.data import Database

    db = Database("sqlite:///app.db")
    name = (await db.query("SELECT name FROM users WHERE id = ?", 7)).value()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "InvalidStateError",
    "NotFound",
    "QueryResult",
    "Request",
    "Response",
    "Route",
    "RouteTable",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("Route", "RouteTable"):
        from wren import routing as _routing

        return getattr(_routing, name)

    if name == "QueryResult":
        from wren.data.result import QueryResult

        return QueryResult

    if name in ("WrenError", "ConfigurationError", "InvalidStateError", "HTTPError", "NotFound"):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
