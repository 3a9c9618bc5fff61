"""Perch exception hierarchy.

Shared across the router, app, ASGI handler, and lifecycle so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when configuration is invalid.

    Typically raised while selecting routes or validating ``AppConfig``
    before the socket is bound.
    """


class AssetError(PerchError):
    """Raised when a bundled asset cannot be loaded at startup."""


class StartupError(PerchError):
    """Raised when the server cannot start or stops before being asked to.

    Covers bind failures (address in use, permission denied) and a
    server that exits before any shutdown signal arrived.
    """


class SignalError(PerchError):
    """Raised when termination signal handlers cannot be installed."""


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the router. The ASGI handler catches these and dispatches
    to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
