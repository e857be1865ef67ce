"""Tests for clover._internal.asgi — typed scope parsing."""

import pytest

from clover._internal.asgi import HTTPScope


class TestHTTPScope:
    def test_from_scope(self) -> None:
        scope = HTTPScope.from_scope(
            {"type": "http", "method": "HEAD", "path": "/about", "query_string": b"a=1"}
        )
        assert scope.method == "HEAD"
        assert scope.path == "/about"

    def test_defaults(self) -> None:
        scope = HTTPScope.from_scope({"type": "http"})
        assert scope.method == "GET"
        assert scope.path == "/"

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/about", "/about"),
            ("about", "/about"),
            ("", "/"),
            ("/about?tab=1", "/about"),
            ("/about#team", "/about"),
            ("/users/{id}", "/users/{id}"),
        ],
    )
    def test_request_path(self, path: str, expected: str) -> None:
        assert HTTPScope.from_scope({"type": "http", "path": path}).request_path == expected

    def test_frozen(self) -> None:
        scope = HTTPScope.from_scope({"type": "http"})
        with pytest.raises(AttributeError):
            scope.path = "/x"  # type: ignore[misc]
