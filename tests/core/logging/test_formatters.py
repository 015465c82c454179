"""Tests for JSON and console log formatters."""

import json
import logging
import sys

from core.logging.context import set_log_context
from core.logging.formatters import ConsoleFormatter, JSONFormatter


def _make_record(
    msg="test message",
    level=logging.INFO,
    name="test.logger",
    exc_info=None,
    **extras,
):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_base_fields(self):
        entry = json.loads(JSONFormatter().format(_make_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "test.logger"
        assert entry["message"] == "test message"
        assert entry["ts"].endswith("Z")

    def test_injects_context(self):
        set_log_context(correlation_id="abc-123", provider="o365")
        entry = json.loads(JSONFormatter().format(_make_record()))
        assert entry["correlation_id"] == "abc-123"
        assert entry["provider"] == "o365"
        assert "operation" not in entry

    def test_extra_fields(self):
        record = _make_record(http_status=201, http_method="POST", entity_count=3)
        entry = json.loads(JSONFormatter().format(record))
        assert entry["http_status"] == 201
        assert entry["http_method"] == "POST"
        assert entry["entity_count"] == 3

    def test_unknown_extras_ignored(self):
        entry = json.loads(JSONFormatter().format(_make_record(not_whitelisted="x")))
        assert "not_whitelisted" not in entry

    def test_numeric_coercion(self):
        entry = json.loads(JSONFormatter().format(_make_record(duration_ms="12.5", attempt="bad")))
        assert entry["duration_ms"] == 12.5
        assert "attempt" not in entry

    def test_access_token_redacted_from_urls(self):
        record = _make_record(http_url="https://apis.live.net/v5.0/me?access_token=secret-token&x=1")
        entry = json.loads(JSONFormatter().format(record))
        assert "secret-token" not in entry["http_url"]
        assert entry["http_url"] == "https://apis.live.net/v5.0/me?access_token=[REDACTED]&x=1"

    def test_error_records_include_file(self):
        entry = json.loads(JSONFormatter().format(_make_record(level=logging.ERROR)))
        assert entry["file"] == "test.py:42"

    def test_exception_info(self):
        try:
            raise ValueError("bad value")
        except ValueError:
            record = _make_record(level=logging.ERROR, exc_info=sys.exc_info())

        entry = json.loads(JSONFormatter().format(record))
        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "bad value"
        assert "Traceback" in entry["exception"]["stacktrace"]


class TestConsoleFormatter:
    def _formatter(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = False
        return formatter

    def test_plain_message(self):
        output = self._formatter().format(_make_record(msg="hello"))
        assert output.endswith("INFO - hello")

    def test_includes_provider_and_short_correlation_id(self):
        set_log_context(provider="microsoft-account", correlation_id="1234567890abcdef")
        output = self._formatter().format(_make_record(msg="hello"))
        assert "[microsoft-account]" in output
        assert "[cid:12345678] hello" in output

    def test_colors_when_enabled(self):
        formatter = ConsoleFormatter()
        formatter._use_colors = True
        output = formatter.format(_make_record(level=logging.WARNING))
        assert "\033[33mWARNING\033[0m" in output
