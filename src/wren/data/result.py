"""Single-use adapter over an executed statement.

``QueryResult`` presents one ``StatementHandle`` through several narrow
accessors. Each accessor is terminal: it reads what it needs, closes the
handle as its last step, and leaves the adapter consumed. A second call
raises ``InvalidStateError`` instead of touching a closed handle.

Usage::

    result = await db.query("SELECT name FROM users WHERE id = ?", 7)
    name = result.value()          # "Alice", or None for 0 / 2+ rows

    result = await db.query("UPDATE users SET name = ? WHERE id = ?", "Bob", 7)
    if not result.did_affect_rows():
        ...

Wrong-shape results (zero or several rows where one is expected) are not
errors: ``value()`` and ``row()`` return ``None``. SQL errors are not
errors either: only ``succeeded()`` reports them, and the other accessors
still return their (possibly meaningless) values.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias, TypeVar

from wren.data.statement import StatementHandle
from wren.errors import InvalidStateError

Row: TypeAlias = dict[str, Any]

T = TypeVar("T")


class Cardinality(enum.Enum):
    """How many rows a single-row lookup actually produced."""

    NO_ROWS = "no_rows"
    ONE_ROW = "one_row"
    MANY_ROWS = "many_rows"


@dataclass(frozen=True, slots=True)
class SingleRow:
    """Outcome of ``QueryResult.single()``.

    ``row`` is set only when ``cardinality`` is ``ONE_ROW``; ``count`` is
    the number of rows the statement produced.
    """

    cardinality: Cardinality
    row: Row | None = None
    count: int = 0

    @property
    def found(self) -> bool:
        return self.cardinality is Cardinality.ONE_ROW


class QueryResult:
    """Wraps one executed statement. Consumed by its first accessor call."""

    __slots__ = ("_open", "_stmt")

    def __init__(self, stmt: StatementHandle) -> None:
        self._stmt = stmt
        self._open = True

    @property
    def consumed(self) -> bool:
        """True once an accessor (or ``close()``) has released the handle."""
        return not self._open

    # -- Affected rows (INSERT / UPDATE / DELETE) --

    def did_affect_rows(self) -> bool:
        """Whether the statement changed one or more rows."""
        return self._consume(lambda stmt: stmt.affected_rows) > 0

    def did_affect_exactly(self, rows: int) -> bool:
        """Whether the statement changed exactly *rows* rows (0 allowed)."""
        return self._consume(lambda stmt: stmt.affected_rows) == rows

    # -- Result sets (SELECT) --

    def for_each_row(self, visit: Callable[[Row], object]) -> bool:
        """Call *visit* once per row, in the order the backend returned them.

        The full result set is read and the handle closed before the
        first call, so *visit* may raise without leaking the handle.
        Returns ``False`` (and never calls *visit*) when there are no rows.
        """
        rows = self._consume(_fetch_rows)
        if not rows:
            return False
        for row in rows:
            visit(row)
        return True

    def value(self) -> Any:
        """First column of the only row, or ``None`` unless exactly one row.

        The column is taken by position, so ``SELECT a.id, b.id`` yields
        ``a.id`` even though both columns are named ``id``.
        """
        values = self._consume(lambda stmt: stmt.fetch_first_column())
        return values[0] if len(values) == 1 else None

    def row(self) -> Row | None:
        """The only row as a column-keyed dict, or ``None`` unless exactly one row."""
        return self._single().row

    def single(self) -> SingleRow:
        """Like ``row()``, but tells "no rows" apart from "too many rows"."""
        return self._single()

    # -- Status --

    def succeeded(self) -> bool:
        """Whether the statement ran without an SQL-level error."""
        return self._consume(lambda stmt: stmt.error_code) == 0

    def close(self) -> None:
        """Release the handle without reading anything."""
        self._consume(lambda stmt: None)

    # -- Context manager --

    def __enter__(self) -> QueryResult:
        return self

    def __exit__(self, *_: object) -> None:
        if self._open:
            self.close()

    # -- Internal --

    def _single(self) -> SingleRow:
        rows = self._consume(_fetch_rows)
        if len(rows) == 1:
            return SingleRow(Cardinality.ONE_ROW, rows[0], 1)
        if not rows:
            return SingleRow(Cardinality.NO_ROWS)
        return SingleRow(Cardinality.MANY_ROWS, count=len(rows))

    def _consume(self, read: Callable[[StatementHandle], T]) -> T:
        """Run *read* against the handle, then close it exactly once."""
        if not self._open:
            msg = "QueryResult already consumed; each result supports one accessor call."
            raise InvalidStateError(msg)
        self._open = False
        try:
            return read(self._stmt)
        finally:
            self._stmt.close()


def _fetch_rows(stmt: StatementHandle) -> list[Row]:
    return [dict(row) for row in stmt.fetch_all()]
