"""Tests for wren.errors — exception hierarchy and error messages."""

import pytest

from wren.data.errors import DataError, QueryError
from wren.errors import (
    ConfigurationError,
    HTTPError,
    InvalidStateError,
    NotFound,
    WrenError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "exc_type", [ConfigurationError, InvalidStateError, HTTPError, DataError]
    )
    def test_is_wren_error(self, exc_type) -> None:
        assert issubclass(exc_type, WrenError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_query_error_is_data_error(self) -> None:
        assert issubclass(QueryError, DataError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"
