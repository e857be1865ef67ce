"""Async test client for clover view servers.

Returns the same ``Response`` type used in production. Sends requests
through the ASGI interface directly, no HTTP involved.
"""

from typing import Any

from clover.http.response import Response
from clover.server.app import ViewServer


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for a ``ViewServer``.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: ViewServer) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        reply = await self.lifespan("startup")
        if reply["type"] == "lifespan.startup.failed":
            raise RuntimeError(reply["message"])
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.lifespan("shutdown")

    async def lifespan(self, event: str) -> dict[str, Any]:
        """Send one lifespan event and return the app's reply message."""
        messages = iter([{"type": f"lifespan.{event}"}, {"type": "lifespan.shutdown"}])
        replies: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return next(messages)

        async def send(message: dict[str, Any]) -> None:
            replies.append(dict(message))

        await self.app({"type": "lifespan", "asgi": {"version": "3.0"}}, receive, send)
        return replies[0]

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        # Split path and query string
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        raw_headers: list[tuple[bytes, bytes]] = []
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": b"", "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            else:
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
