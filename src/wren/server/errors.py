"""Error handling for wren requests.

Maps HTTPError exceptions and unexpected failures to plain-text
responses.
"""

import logging
import traceback

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.server")

_TEXT = "text/plain; charset=utf-8"


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError to a Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"
    response = Response(body=detail, status=exc.status, content_type=_TEXT)
    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Log an unhandled exception and return a 500."""
    logger.exception("Unhandled error in %s %s", request.method, request.path, exc_info=exc)
    body = "Internal Server Error"
    if debug:
        body = "".join(traceback.format_exception(exc))
    return Response(body=body, status=500, content_type=_TEXT)
