"""Tests for tenant header resolution and request-id log stamping."""
import logging

from starlette.requests import Request

from bulkimport.core.deps import get_tenant_context
from bulkimport.core.logging import RequestIdLogFilter
from bulkimport.middleware.request_id import _request_id


def make_request(headers: dict[str, str]) -> Request:
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/api/v1/import/customers",
        "query_string": b"org=org_evil",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
    }
    return Request(scope)


def test_tenant_read_from_proxy_headers():
    ctx = get_tenant_context(make_request({"X-Organization-Id": " org_a ", "X-User-Id": "user_1"}))

    assert ctx.org_id == "org_a"
    assert ctx.user_id == "user_1"


def test_query_string_is_never_used_for_tenant():
    ctx = get_tenant_context(make_request({}))

    assert ctx.org_id is None
    assert ctx.user_id is None


def test_blank_header_is_treated_as_missing():
    ctx = get_tenant_context(make_request({"X-Organization-Id": "   "}))

    assert ctx.org_id is None


def test_log_filter_stamps_current_request_id():
    record = logging.LogRecord("bulkimport", logging.INFO, __file__, 1, "hello", None, None)
    token = _request_id.set("req-42")
    try:
        assert RequestIdLogFilter().filter(record) is True
    finally:
        _request_id.reset(token)

    assert record.request_id == "req-42"


def test_log_filter_defaults_outside_a_request():
    record = logging.LogRecord("bulkimport", logging.INFO, __file__, 1, "hello", None, None)

    RequestIdLogFilter().filter(record)

    assert record.request_id == "-"
