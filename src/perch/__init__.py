"""Perch — a tiny static responder for htmx pages.

Serves a fixed set of bundled assets from memory, answers one POST
probe, and shuts down cleanly on SIGINT/SIGTERM.

Basic usage::

    from perch import AppConfig, create_app

    app = create_app(AppConfig(routes="minimal"))

Or from the command line::

    perch serve --port 3000
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "AssetBundle",
    "AssetError",
    "ConfigurationError",
    "HTTPError",
    "Lifecycle",
    "NotFound",
    "PerchError",
    "Request",
    "Response",
    "RouteEntry",
    "SignalError",
    "StartupError",
    "create_app",
    "load_assets",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast; uvicorn and anyio load only when serving.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name in ("AssetBundle", "load_assets"):
        from perch import assets as _assets

        return getattr(_assets, name)

    if name == "RouteEntry":
        from perch.routes import RouteEntry

        return RouteEntry

    if name == "create_app":
        from perch.responder import create_app

        return create_app

    if name == "Lifecycle":
        from perch.server.lifecycle import Lifecycle

        return Lifecycle

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name in (
        "AssetError",
        "ConfigurationError",
        "HTTPError",
        "NotFound",
        "PerchError",
        "SignalError",
        "StartupError",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
