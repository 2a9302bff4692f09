"""Async SQLite wrapper using stdlib sqlite3 + anyio.

Runs all blocking sqlite3 calls in a worker thread via ``anyio.to_thread``.
A statement is executed and its result set read in the same worker call,
producing a ``BufferedStatement`` that can be inspected without I/O.

Uses Python 3.12+ features:
    - ``check_same_thread=False``: safe for anyio's thread pool dispatch
    - ``autocommit=True``: every statement commits on its own
"""

import sqlite3
from collections.abc import Callable, Sequence
from contextlib import closing
from typing import Any

import anyio
import anyio.to_thread

from wren.data.statement import BufferedStatement


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return anyio.to_thread.run_sync(func, *args)


def _execute_buffered(
    conn: sqlite3.Connection, sql: str, params: Sequence[Any]
) -> BufferedStatement:
    """Execute one statement and drain its cursor. Runs in a worker thread."""
    try:
        with closing(conn.execute(sql, params)) as cursor:
            if cursor.description is None:
                return BufferedStatement(sql, affected_rows=max(cursor.rowcount, 0))
            columns = [desc[0] for desc in cursor.description]
            raw = cursor.fetchall()
            return BufferedStatement(
                sql,
                rows=[dict(zip(columns, row, strict=True)) for row in raw],
                first_column=[row[0] for row in raw],
                affected_rows=max(cursor.rowcount, 0),
            )
    except sqlite3.Error as exc:
        code = getattr(exc, "sqlite_errorcode", None) or 1
        return BufferedStatement.failed(sql, code, str(exc))


class AsyncConnection:
    """Async wrapper around ``sqlite3.Connection``."""

    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> BufferedStatement:
        return await _run_sync(_execute_buffered, self._conn, sql, params)

    async def executescript(self, sql: str) -> None:
        """Execute multiple SQL statements at once.

        Useful for schema setup (CREATE TABLE + CREATE INDEX, etc.).
        Raises ``sqlite3.Error`` on failure, unlike ``execute``.
        """
        await _run_sync(self._conn.executescript, sql)

    async def close(self) -> None:
        await _run_sync(self._conn.close)


async def connect(path: str) -> AsyncConnection:
    """Open an async SQLite connection.

    Uses ``autocommit=True`` so individual statements commit immediately.
    Uses ``check_same_thread=False`` for safe use with anyio's thread pool.
    """
    conn = await _run_sync(lambda: sqlite3.connect(path, autocommit=True, check_same_thread=False))
    return AsyncConnection(conn)
