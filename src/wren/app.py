"""The wren application — an ASGI callable with static routes in front.

Static routes are checked first; a hit is served and nothing else runs
for that request. Misses go through user middleware to the fallback
handler, or become a 404 when there is none.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

from wren._internal.asgi import Receive, Scope, Send
from wren.config import AppConfig
from wren.data.database import Database, _db_var
from wren.errors import InvalidStateError
from wren.http.request import Request
from wren.middleware.protocol import Middleware
from wren.middleware.static import StaticRoutes
from wren.routing.route import Route
from wren.routing.table import RouteTable
from wren.server.handler import handle_request

logger = logging.getLogger("wren.server")

Handler: TypeAlias = Callable[[Request], Any]


class App:
    """The wren application.

    Mutable during setup (static routes, middleware, fallback, hooks).
    Frozen at the first request or lifespan startup.

    Usage::

        app = App(AppConfig(web_root="public"))
        app.static("", "index.html")
        app.static("robots.txt", "robots.txt", header="Cache-Control: max-age=3600")

        @app.fallback
        def dynamic(request):
            return ("Not here", 404)
    """

    __slots__ = (
        "_db",
        "_fallback",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_middleware_list",
        "_routes",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None, *, db: Database | str | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._routes = RouteTable(web_root=self.config.web_root)
        self._middleware_list: list[Middleware] = []
        self._middleware: tuple[Callable[..., Any], ...] = ()
        self._fallback: Handler | None = None
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen = False
        self._freeze_lock = threading.Lock()

        # Accepts a Database instance or connection URL string,
        # falling back to config.database_url.
        url = db if isinstance(db, str) else self.config.database_url
        if isinstance(db, Database):
            self._db: Database | None = db
        elif url is not None:
            self._db = Database(url, echo=self.config.echo)
        else:
            self._db = None

    # -- Static routes --

    @property
    def routes(self) -> RouteTable:
        return self._routes

    def static(
        self, request_path: str, file_path: str | Path, *, header: str | None = None
    ) -> Route:
        """Register a static route against ``config.web_root``.

        Raises ``ConfigurationError`` immediately if the file is missing.
        """
        self._check_not_frozen()
        return self._routes.static(request_path, file_path, header=header)

    def add_route(self, route: Route) -> None:
        """Register a route built elsewhere with ``Route.new_builder()``."""
        self._check_not_frozen()
        self._routes.add(route)

    # -- Pipeline --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline (runs after static routes)."""
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    def fallback(self, func: Handler) -> Handler:
        """Register the handler for requests no static route answered.

        Usable as a decorator. The handler receives the ``Request`` and
        may be sync or async.
        """
        self._check_not_frozen()
        self._fallback = func
        return func

    @property
    def db(self) -> Database:
        """The configured database. Raises ``LookupError`` if none."""
        if self._db is None:
            msg = "No database configured. Pass db= or set AppConfig.database_url."
            raise LookupError(msg)
        return self._db

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run at server startup (sync or async)."""
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register a function to run at server shutdown (sync or async)."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        db_token = _db_var.set(self._db) if self._db is not None else None
        try:
            await handle_request(
                scope,
                receive,
                send,
                middleware=self._middleware,
                fallback=self._fallback,
                debug=self.config.debug,
            )
        finally:
            if db_token is not None:
                _db_var.reset(db_token)

    async def startup(self) -> None:
        """Freeze, connect the database, and run startup hooks."""
        self._ensure_frozen()
        if self._db is not None:
            await self._db.connect()
            _db_var.set(self._db)
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks and disconnect the database."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result
        if self._db is not None:
            await self._db.disconnect()

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the development server (requires ``pounce``)."""
        from wren.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
        )

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        self._routes.freeze()
        # Static routes first: a hit ends the request before user middleware
        self._middleware = (StaticRoutes(self._routes), *self._middleware_list)
        self._frozen = True
        logger.debug(
            "app frozen: %d static route(s), %d middleware",
            len(self._routes),
            len(self._middleware_list),
        )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes, middleware, and handlers before the first request."
            )
            raise InvalidStateError(msg)
