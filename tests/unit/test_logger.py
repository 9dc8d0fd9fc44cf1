"""
Name: Structured Logger Tests

Responsibilities:
  - JSON output with request context
  - Secrets in extras are redacted
  - Stack traces are attached when exc_info is present
"""

import json
import logging

import pytest

from taskvault.context import clear_context, set_request_context
from taskvault.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(msg: str = "hola", exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="taskvault",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_format_includes_request_context():
    set_request_context(request_id="req-1", method="GET", path="/tasks")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["message"] == "hola"
    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/tasks"


def test_sensitive_extras_are_redacted():
    payload = json.loads(
        JSONFormatter().format(
            _record(password="longenough1", authorization="Bearer abc", user_id="u1")
        )
    )

    assert payload["password"] == "***REDACTADO***"
    assert payload["authorization"] == "***REDACTADO***"
    assert payload["user_id"] == "u1"


def test_email_extra_is_redacted():
    payload = json.loads(JSONFormatter().format(_record(email="a@x.com")))

    assert payload["email"] == "***REDACTADO***"
    assert "a@x.com" not in json.dumps(payload)


def test_exception_stacktrace_is_logged():
    try:
        raise RuntimeError("boom")
    except RuntimeError as exc:
        record = _record(exc_info=(type(exc), exc, exc.__traceback__))

    payload = json.loads(JSONFormatter().format(record))

    assert payload["exception"]["type"] == "RuntimeError"
    assert payload["exception"]["stacktrace"]
