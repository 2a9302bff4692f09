"""Async test client for wren applications.

Sends requests through the ASGI interface directly — no HTTP involved —
and returns the same ``Response`` type used in production.
"""

from __future__ import annotations

from typing import Any

from wren.app import App
from wren.http.response import Response


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for wren applications.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/robots.txt")
            assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        await self.app.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self, path: str, *, body: bytes = b"", headers: dict[str, str] | None = None
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, body=body, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request and collect the response."""
        path, _, query = path.partition("?")
        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]
        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method,
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": query.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("testclient", 50000),
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if body_sent:
                return {"type": "http.disconnect"}
            body_sent = True
            return {"type": "http.request", "body": body, "more_body": False}

        status = 0
        response_headers: list[tuple[str, str]] = []
        chunks: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers.extend(
                    (name.decode("latin-1"), value.decode("latin-1"))
                    for name, value in message.get("headers", [])
                )
            elif message["type"] == "http.response.body":
                chunks.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "application/octet-stream"
        extra: list[tuple[str, str]] = []
        for name, value in response_headers:
            if name == "content-type":
                content_type = value
            else:
                extra.append((name, value))

        return Response(
            body=b"".join(chunks),
            status=status,
            content_type=content_type,
            headers=tuple(extra),
        )
