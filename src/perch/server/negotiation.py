"""Content negotiation — checks what a handler handed back.

Route and error handlers return a ``Response``; anything else is a
programming error that surfaces as a 500 for that request.
"""

from typing import Any

from perch.http.response import Response


def negotiate(value: Any) -> Response:
    """Return *value* as a ``Response``, or raise ``TypeError``."""
    if isinstance(value, Response):
        return value
    msg = f"Handler returned {type(value).__name__}; expected Response."
    raise TypeError(msg)
