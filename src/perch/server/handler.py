"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI request scopes. Converts the
scope to a typed Request, dispatches through the router, and sends the
Response back through ASGI send().
"""

from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import invoke
from perch.errors import HTTPError
from perch.http.request import Request
from perch.routing.router import Router
from perch.server.errors import handle_http_error, handle_internal_error
from perch.server.negotiation import negotiate
from perch.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int, Callable[..., Any]],
) -> None:
    """Process a single HTTP request."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)
    head_only = request.method == "HEAD"

    try:
        match = router.match(request.method, request.path)
        response = negotiate(await invoke(match.route.handler))
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers)
    except Exception as exc:
        response = handle_internal_error(exc, request)

    await send_response(response, send, head_only=head_only)

