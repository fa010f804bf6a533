"""
Test suite for the request-scoped context store.
"""

import pytest
from starlette.requests import Request

from webdemos.context import RequestContext, get_request_context


def _make_request() -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "headers": []})


class TestRequestContext:
    """Test key/value lookups."""

    def setup_method(self):
        self.context = RequestContext()

    def test_missing_key(self):
        assert self.context.get("request") == (None, False)
        assert "request" not in self.context

    def test_set_and_get(self):
        self.context.set("request", "中间件")
        assert self.context.get("request") == ("中间件", True)
        assert len(self.context) == 1

    def test_none_value_is_found(self):
        self.context.set("request", None)
        assert self.context.get("request") == (None, True)

    def test_set_replaces_value(self):
        self.context.set("k", 1)
        self.context.set("k", 2)
        assert self.context.must_get("k") == 2
        assert list(self.context) == ["k"]

    def test_must_get_missing_key(self):
        with pytest.raises(KeyError):
            self.context.must_get("absent")


class TestGetRequestContext:
    """Test context attachment to requests."""

    def test_created_once_per_request(self):
        request = _make_request()
        first = get_request_context(request)
        first.set("k", "v")

        assert get_request_context(request) is first

    def test_requests_do_not_share_context(self):
        get_request_context(_make_request()).set("k", "v")
        assert get_request_context(_make_request()).get("k") == (None, False)
