"""Data layer error hierarchy."""

from wren.errors import WrenError


class DataError(WrenError):
    """Base for all wren.data errors."""


class QueryError(DataError):
    """Raised when the database itself cannot be reached or scripted.

    SQL-level failures of a single statement never raise; they surface
    through ``QueryResult.succeeded()``.
    """
