"""Immutable HTTP request.

Only the method and path are kept: they are all routing consults.
Bodies, query strings, and headers are never read.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, frozen at creation."""

    method: str
    path: str

    @classmethod
    def from_asgi(cls, scope: dict[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(method=scope["method"].upper(), path=scope["path"] or "/")
