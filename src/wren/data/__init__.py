"""Single-use query results over async SQLite.

SQL in, one ``QueryResult`` out. Each result answers exactly one question
(affected rows, one value, one row, every row, success) and closes its
statement while answering.

Basic usage::

    from wren.data import Database

    db = Database("sqlite:///app.db")

    name = (await db.query("SELECT name FROM users WHERE id = ?", 42)).value()
    changed = (await db.query("UPDATE users SET name = ?", "x")).did_affect_rows()
"""

from wren.data.database import Database, get_db
from wren.data.errors import DataError, QueryError
from wren.data.result import Cardinality, QueryResult, Row, SingleRow
from wren.data.statement import BufferedStatement, StatementHandle

__all__ = [
    "BufferedStatement",
    "Cardinality",
    "DataError",
    "Database",
    "QueryError",
    "QueryResult",
    "Row",
    "SingleRow",
    "StatementHandle",
    "get_db",
]
