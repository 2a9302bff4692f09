"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI HTTP directly. Converts the
scope to a Request, runs the middleware chain down to the fallback
handler, and sends the Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren.errors import HTTPError, NotFound
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.sender import send_response


def _to_response(result: Any) -> Response:
    """Accept a Response, a str/bytes body, or a (body, status) tuple."""
    if isinstance(result, Response):
        return result
    if isinstance(result, tuple):
        body, status = result
        return Response(body=body, status=status)
    if isinstance(result, (str, bytes)):
        return Response(body=result)
    msg = (
        f"Handler returned {type(result).__name__}; "
        "expected Response, str, bytes or (body, status)"
    )
    raise TypeError(msg)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    middleware: tuple[Callable[..., Any], ...],
    fallback: Callable[..., Any] | None,
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    async def dispatch(req: Request) -> Response:
        if fallback is None:
            raise NotFound(f"No static route or handler for {req.path!r}")
        result = fallback(req)
        if inspect.isawaitable(result):
            result = await result
        return _to_response(result)

    # Wrap from the innermost outwards so middleware[0] runs first
    handler: Next = dispatch
    for mw in reversed(middleware):
        handler = _wrap(mw, handler)

    try:
        response = await handler(request)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    await send_response(response, send, head=request.method == "HEAD")


def _wrap(mw: Callable[..., Any], nxt: Next) -> Next:
    async def call(req: Request) -> Response:
        return await mw(req, nxt)

    return call
