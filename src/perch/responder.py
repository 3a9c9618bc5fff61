"""The static responder — wires the route table into an App.

Every handler returns a ``Response`` built once, at startup, from the
loaded asset bytes. Requests never build or mutate anything; they get
the same immutable object back.
"""

import logging
from collections.abc import Callable

from perch.app import App
from perch.assets import AssetBundle, load_assets
from perch.config import AppConfig
from perch.http.response import Response
from perch.routes import NOT_FOUND, RouteEntry, required_assets, select_routes

logger = logging.getLogger("perch.responder")


def build_response(entry: RouteEntry, assets: AssetBundle) -> Response:
    """The fixed response for *entry*, with its body taken from *assets*."""
    body = assets[entry.asset] if entry.asset is not None else b""
    return Response(body=body, status=entry.status, content_type=entry.content_type)


def _static_handler(entry: RouteEntry, response: Response) -> Callable[[], Response]:
    def handler() -> Response:
        if entry.diagnostic is not None:
            print(entry.diagnostic, flush=True)
            logger.debug("%s %s hit", entry.method, entry.path)
        return response

    handler.__name__ = f"serve_{entry.path.strip('/') or 'index'}"
    handler.__qualname__ = handler.__name__
    return handler


def create_app(config: AppConfig | None = None, assets: AssetBundle | None = None) -> App:
    """Build the static responder App.

    Args:
        config: Route selection and asset location. Defaults to
            ``AppConfig()`` (full route set, bundled assets).
        assets: Pre-loaded assets. When omitted, the assets the
            selected routes need are loaded from ``config.asset_dir``.

    Raises:
        ConfigurationError: If the route selection is invalid.
        AssetError: If a required asset is missing.
    """
    config = config or AppConfig()
    entries = select_routes(config.routes)
    if assets is None:
        assets = load_assets(config.asset_dir, required_assets(entries))

    app = App(config)
    for entry in entries:
        response = build_response(entry, assets)
        app.add_route(
            entry.path,
            _static_handler(entry, response),
            methods=[entry.method],
        )

    not_found = build_response(NOT_FOUND, assets)

    @app.error(404)
    def page_not_found() -> Response:
        return not_found

    logger.debug("Registered %d routes from %s", len(entries), assets.source)
    return app
