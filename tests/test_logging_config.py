# tests/test_logging_config.py
import json
import logging

from openshiftmcp.logging_config import StructuredFormatter, request_id_var, with_request_id


def _record(message):
    return logging.LogRecord("openshiftmcp.test", logging.INFO, __file__, 1, message, None, None)


def test_structured_formatter_emits_json():
    payload = json.loads(StructuredFormatter().format(_record("hello")))
    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "openshiftmcp.test"
    assert "request_id" not in payload


def test_structured_formatter_includes_request_id():
    token = request_id_var.set("abc123")
    try:
        payload = json.loads(StructuredFormatter().format(_record("hello")))
    finally:
        request_id_var.reset(token)
    assert payload["request_id"] == "abc123"


async def test_with_request_id_scopes_an_id():
    seen = []

    @with_request_id
    async def tool():
        seen.append(request_id_var.get())
        return "ok"

    assert await tool() == "ok"
    assert await tool() == "ok"
    assert seen[0] and seen[1]
    assert seen[0] != seen[1]
    assert request_id_var.get() is None
