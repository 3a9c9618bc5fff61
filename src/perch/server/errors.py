"""Error handling for perch requests.

Maps HTTPError exceptions and unexpected failures to Response objects,
using registered error handlers or plain-text defaults.
"""

import logging
from collections.abc import Callable
from typing import Any

from perch._internal.invoke import invoke
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.negotiation import negotiate

logger = logging.getLogger("perch.server")


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int, Callable[..., Any]],
) -> Response:
    """Map an HTTPError to a Response using registered error handlers."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(exc.status)
    if handler is not None:
        response = negotiate(await invoke(handler))
        # Keep the error status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
    else:
        response = Response(
            body=exc.detail or f"Error {exc.status}",
            status=exc.status,
            content_type="text/plain; charset=utf-8",
        )

    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request) -> Response:
    """Log an unexpected exception and answer this request with a 500."""
    logger.error("500 %s %s", request.method, request.path, exc_info=exc)
    return Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )
