"""Shared fixtures for perch tests."""

from importlib import resources

import pytest

from perch.app import App
from perch.assets import AssetBundle, load_assets
from perch.responder import create_app
from perch.routing.route import Route


def bundled(name: str) -> bytes:
    """Raw bytes of a bundled asset, read straight from package data."""
    return (resources.files("perch") / "static" / name).read_bytes()


@pytest.fixture
def assets() -> AssetBundle:
    return load_assets()


@pytest.fixture
def app(assets: AssetBundle) -> App:
    """The full static responder built from the bundled assets."""
    return create_app(assets=assets)


def compiled_routes(app: App) -> list[Route]:
    """Freeze *app* and return its routes in registration order."""
    app.freeze()
    assert app._router is not None
    return app._router.routes
