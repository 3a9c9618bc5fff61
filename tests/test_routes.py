"""Tests for perch.routes — the static route table and route sets."""

import pytest

from perch.errors import ConfigurationError
from perch.routes import (
    FULL_ROUTES,
    NOT_FOUND,
    ROUTE_SETS,
    RouteEntry,
    required_assets,
    select_routes,
)


class TestTable:
    def test_full_paths(self) -> None:
        assert [(e.method, e.path) for e in FULL_ROUTES] == [
            ("GET", "/"),
            ("GET", "/style.css"),
            ("GET", "/htmx.min.js"),
            ("GET", "/sse.js"),
            ("GET", "/ws.js"),
            ("POST", "/test"),
            ("GET", "/yipee.gif"),
        ]

    def test_content_types_are_explicit(self) -> None:
        types = {e.path: e.content_type for e in FULL_ROUTES}
        assert types["/"] == "text/html; charset=utf-8"
        assert types["/style.css"] == "text/css"
        assert types["/yipee.gif"] == "image/gif"
        assert types["/test"] is None

    def test_test_route_is_bodiless_diagnostic(self) -> None:
        (entry,) = [e for e in FULL_ROUTES if e.path == "/test"]
        assert entry.asset is None
        assert entry.diagnostic == "TEST"
        assert entry.status == 200

    def test_not_found_entry(self) -> None:
        assert NOT_FOUND.status == 404
        assert NOT_FOUND.asset == "404.html"
        assert NOT_FOUND.content_type == "text/html"


class TestSelectRoutes:
    def test_default_is_full(self) -> None:
        assert select_routes() == FULL_ROUTES

    def test_minimal(self) -> None:
        assert [e.path for e in select_routes("minimal")] == ["/", "/style.css"]

    def test_explicit_paths_keep_table_order(self) -> None:
        entries = select_routes(("/test", "/"))
        assert [e.path for e in entries] == ["/", "/test"]

    def test_unknown_set(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown route set 'tiny'"):
            select_routes("tiny")

    def test_unknown_path(self) -> None:
        with pytest.raises(ConfigurationError, match="/admin"):
            select_routes(("/", "/admin"))

    def test_every_set_is_selectable(self) -> None:
        for name in ROUTE_SETS:
            assert select_routes(name)


class TestRequiredAssets:
    def test_always_includes_404(self) -> None:
        assert required_assets(()) == ("404.html",)

    def test_minimal(self) -> None:
        assert required_assets(select_routes("minimal")) == ("index.html", "style.css", "404.html")

    def test_skips_bodiless_routes(self) -> None:
        entries = (RouteEntry("POST", "/test", diagnostic="TEST"),)
        assert required_assets(entries) == ("404.html",)
