"""Tests for perch.http.response — immutable Response."""

import pytest

from perch.http.response import Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.body == b""
        assert r.status == 200
        assert r.content_type == "text/html; charset=utf-8"
        assert r.headers == ()

    def test_with_status_returns_new(self) -> None:
        original = Response("hi")
        changed = original.with_status(404)
        assert changed.status == 404
        assert original.status == 200

    def test_with_header_appends(self) -> None:
        r = Response().with_header("X-A", "1").with_header("X-B", "2")
        assert r.headers == (("X-A", "1"), ("X-B", "2"))

    def test_header_lookup_is_case_insensitive(self) -> None:
        r = Response().with_header("Cache-Control", "no-cache")
        assert r.header("cache-control") == "no-cache"
        assert r.header("x-missing") is None

    def test_body_bytes_from_str(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()

    def test_frozen(self) -> None:
        r = Response()
        with pytest.raises(AttributeError):
            r.status = 500  # type: ignore[misc]
