"""Async database access that hands back ``QueryResult`` adapters.

SQLite only (via stdlib ``sqlite3`` + ``anyio``). Each ``query()`` call
executes one statement in a worker thread, buffers its outcome, and wraps
it in a single-use ``QueryResult``.

Connection URL format::

    sqlite:///path/to/db.sqlite    # SQLite file
    sqlite:///:memory:             # In-memory SQLite
"""

from __future__ import annotations

import logging
import sqlite3
import threading
import time
from collections.abc import Sequence
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

import anyio

from wren.data.errors import QueryError
from wren.data.result import QueryResult
from wren.errors import ConfigurationError

logger = logging.getLogger("wren.data")

# App-level database accessor (set by App during lifespan startup).
_db_var: ContextVar[Database] = ContextVar("wren_db")


def get_db() -> Database:
    """Return the app-level database instance.

    Available when a database is configured on the ``App``::

        app = App(AppConfig(database_url="sqlite:///app.db"))

    Raises ``LookupError`` if no database is configured or the app
    has not started yet.
    """
    return _db_var.get()


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    """Database connection configuration."""

    url: str
    echo: bool = False


class Database:
    """Async statement execution returning single-use results.

    Usage::

        db = Database("sqlite:///app.db")

        # Lookup
        name = (await db.query("SELECT name FROM users WHERE id = ?", 42)).value()

        # Iterate
        (await db.query("SELECT * FROM users ORDER BY id")).for_each_row(print)

        # Write
        ok = (await db.query("DELETE FROM users WHERE id = ?", 42)).did_affect_rows()
    """

    __slots__ = ("_async_lock", "_config", "_conn", "_initialized", "_lock", "_path")

    def __init__(self, url: str, /, *, echo: bool = False) -> None:
        self._config = DatabaseConfig(url=url, echo=echo)
        self._path = _parse_sqlite_path(url)
        self._lock = threading.Lock()
        self._async_lock: anyio.Lock | None = None  # Created lazily on first use
        self._conn: Any = None
        self._initialized = False

    @property
    def url(self) -> str:
        return self._config.url

    # -- Echo / query logging --

    def _log_query(self, sql: str, params: Sequence[Any], elapsed: float) -> None:
        """Log a statement when echo is enabled."""
        if not self._config.echo:
            return
        ms = elapsed * 1000
        param_str = f"  params={tuple(params)!r}" if params else ""
        logger.info("%6.1fms  %s%s", ms, sql, param_str)

    # -- Public query API --

    async def query(self, sql: str, /, *params: Any) -> QueryResult:
        """Execute one statement and wrap it in a ``QueryResult``.

        SQL errors do not raise; check ``result.succeeded()``.

        Usage::

            result = await db.query("SELECT * FROM users WHERE id = ?", 42)
            user = result.row()
        """
        conn = await self._connection()
        if self._async_lock is None:
            self._async_lock = anyio.Lock()
        t0 = time.perf_counter()
        async with self._async_lock:
            stmt = await conn.execute(sql, params)
        self._log_query(sql, params, time.perf_counter() - t0)
        if stmt.error_code:
            logger.debug(
                "statement failed (code %d): %s: %s", stmt.error_code, sql, stmt.error_message
            )
        return QueryResult(stmt)

    async def execute_script(self, sql: str, /) -> None:
        """Execute multiple SQL statements at once.

        Useful for schema setup::

            await db.execute_script('''
                CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT);
                CREATE INDEX idx_users_name ON users(name);
            ''')

        Raises ``QueryError`` if any statement fails.
        """
        conn = await self._connection()
        if self._async_lock is None:
            self._async_lock = anyio.Lock()
        t0 = time.perf_counter()
        async with self._async_lock:
            try:
                await conn.executescript(sql)
            except sqlite3.Error as exc:
                raise QueryError(str(exc)) from exc
            finally:
                self._log_query(sql, (), time.perf_counter() - t0)

    # -- Lifecycle --

    async def _connection(self) -> Any:
        if not self._initialized:
            await self.connect()
        return self._conn

    async def connect(self) -> None:
        """Open the connection.

        Called automatically on first query. Call explicitly if you want
        to fail fast at startup.
        """
        if self._initialized:
            return
        from wren.data._sqlite import connect as sqlite_connect

        try:
            conn = await sqlite_connect(self._path)
            await conn.executescript("PRAGMA foreign_keys=ON;")
        except sqlite3.Error as exc:
            msg = f"Cannot open database {self._config.url!r}: {exc}"
            raise QueryError(msg) from exc

        with self._lock:
            self._conn = conn
            self._initialized = True
        logger.debug("connected to %s", self._config.url)

    async def disconnect(self) -> None:
        """Close the connection."""
        with self._lock:
            if not self._initialized:
                return
            conn, self._conn = self._conn, None
            self._initialized = False
        await conn.close()
        logger.debug("disconnected from %s", self._config.url)

    # -- Context manager --

    async def __aenter__(self) -> Database:
        await self.connect()
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.disconnect()


def _parse_sqlite_path(url: str) -> str:
    """Extract the file path from a sqlite:// URL."""
    # sqlite:///path/to/db  ->  path/to/db
    # sqlite:///:memory:    ->  :memory:
    for prefix in ("sqlite:///", "sqlite://"):
        if url.startswith(prefix):
            return url[len(prefix) :]
    msg = f"Unsupported database URL: {url!r}. Supported: sqlite:///path, sqlite:///:memory:"
    raise ConfigurationError(msg)
