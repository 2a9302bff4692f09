"""Statement handles — one executed statement and its pending results.

``StatementHandle`` is the shape ``QueryResult`` consumes. Any backend
object with these members works; ``BufferedStatement`` is the one the
SQLite backend produces.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from wren.errors import InvalidStateError


@runtime_checkable
class StatementHandle(Protocol):
    """An executed statement. Stateful, single-use, not reentrant.

    ``affected_rows`` is meaningful for INSERT/UPDATE/DELETE.
    ``error_code`` is 0 when the statement ran without an SQL error.
    ``fetch_all()`` drains the one-shot result cursor as column-keyed rows;
    ``fetch_first_column()`` drains it as the first value of each row, by
    position, so duplicate column names cannot shadow it.
    After ``close()`` nothing may be read.
    """

    @property
    def affected_rows(self) -> int: ...

    @property
    def error_code(self) -> int: ...

    def fetch_all(self) -> list[dict[str, Any]]: ...

    def fetch_first_column(self) -> list[Any]: ...

    def close(self) -> None: ...


class BufferedStatement:
    """A statement whose result set was fully read at execution time.

    Built by the SQLite backend in the worker thread, so accessors never
    block the event loop.
    """

    __slots__ = (
        "_affected_rows",
        "_closed",
        "_consumed",
        "_error_code",
        "_error_message",
        "_first_column",
        "_rows",
        "sql",
    )

    def __init__(
        self,
        sql: str,
        *,
        rows: list[dict[str, Any]] | None = None,
        first_column: list[Any] | None = None,
        affected_rows: int = 0,
        error_code: int = 0,
        error_message: str = "",
    ) -> None:
        self.sql = sql
        self._rows = rows if rows is not None else []
        # Without the raw tuples, fall back to each dict's first key
        if first_column is None:
            first_column = [next(iter(row.values()), None) for row in self._rows]
        if len(first_column) != len(self._rows):
            msg = f"first_column has {len(first_column)} values for {len(self._rows)} rows"
            raise ValueError(msg)
        self._first_column = first_column
        self._affected_rows = affected_rows
        self._error_code = error_code
        self._error_message = error_message
        self._consumed = False
        self._closed = False

    @classmethod
    def failed(cls, sql: str, error_code: int, error_message: str) -> BufferedStatement:
        """A statement that raised an SQL error: no rows, nothing affected."""
        return cls(sql, error_code=error_code or 1, error_message=error_message)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def affected_rows(self) -> int:
        self._check_open()
        return self._affected_rows

    @property
    def error_code(self) -> int:
        self._check_open()
        return self._error_code

    @property
    def error_message(self) -> str:
        self._check_open()
        return self._error_message

    def fetch_all(self) -> list[dict[str, Any]]:
        self._drain()
        rows, self._rows = self._rows, []
        self._first_column = []
        return rows

    def fetch_first_column(self) -> list[Any]:
        self._drain()
        values, self._first_column = self._first_column, []
        self._rows = []
        return values

    def close(self) -> None:
        self._check_open()
        self._closed = True
        self._rows = []
        self._first_column = []

    def _drain(self) -> None:
        self._check_open()
        if self._consumed:
            msg = "Result cursor already consumed."
            raise InvalidStateError(msg)
        self._consumed = True

    def _check_open(self) -> None:
        if self._closed:
            msg = f"Statement is closed: {self.sql!r}"
            raise InvalidStateError(msg)
