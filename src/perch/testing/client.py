"""In-process test client.

Requests are fed straight into the app's ASGI callable and the emitted
messages are folded back into a ``perch.http.Response``. Nothing touches
a socket, so route tests need neither a port nor a running server.
"""

from typing import Any

from perch._internal.asgi import Scope
from perch.app import App
from perch.http.response import Response


def _http_scope(method: str, target: str, headers: dict[str, str] | None) -> Scope:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }


class _Exchange:
    """One request body going in, one response coming out."""

    __slots__ = ("_chunks", "_headers", "_pending_body", "_status")

    def __init__(self, body: bytes) -> None:
        self._pending_body: bytes | None = body
        self._status = 500
        self._headers: list[tuple[bytes, bytes]] = []
        self._chunks: list[bytes] = []

    async def receive(self) -> dict[str, Any]:
        if self._pending_body is None:
            return {"type": "http.disconnect"}
        body, self._pending_body = self._pending_body, None
        return {"type": "http.request", "body": body, "more_body": False}

    async def send(self, message: dict[str, Any]) -> None:
        kind = message["type"]
        if kind == "http.response.start":
            self._status = message["status"]
            self._headers = list(message.get("headers", ()))
        elif kind == "http.response.body":
            self._chunks.append(message.get("body", b""))

    def to_response(self) -> Response:
        content_type: str | None = None
        others: list[tuple[str, str]] = []
        for raw_name, raw_value in self._headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            else:
                others.append((name, value))
        return Response(
            body=b"".join(self._chunks),
            status=self._status,
            content_type=content_type,
            headers=tuple(others),
        )


class TestClient:
    """Drive an ``App`` through ASGI without a server.

    Entering the client compiles the route table, as lifespan startup
    would under a real server::

        async with TestClient(app) as client:
            response = await client.get("/style.css")
            assert response.content_type == "text/css"
    """

    __test__ = False  # not a pytest test class
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app.freeze()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send one request and collect the app's reply.

        ``content-type`` is lifted into ``Response.content_type`` (``None``
        when the app sent none); every other header, ``content-length``
        included, stays in ``Response.headers``.
        """
        exchange = _Exchange(body or b"")
        await self.app(_http_scope(method, path, headers), exchange.receive, exchange.send)
        return exchange.to_response()
