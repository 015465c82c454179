"""Tests for logging utilities."""

import logging

from core.errors import AuthError
from core.logging.utilities import log_exception, log_with_context


class TestLogWithContext:
    def test_passes_extras(self, caplog):
        logger = logging.getLogger("test.utilities")
        with caplog.at_level(logging.INFO, logger="test.utilities"):
            log_with_context(logger, logging.INFO, "API call complete", http_status=201)

        record = caplog.records[-1]
        assert record.getMessage() == "API call complete"
        assert record.http_status == 201

    def test_drops_reserved_keys(self, caplog):
        logger = logging.getLogger("test.utilities")
        with caplog.at_level(logging.INFO, logger="test.utilities"):
            # "name" would clash with LogRecord.name and raise KeyError
            log_with_context(logger, logging.INFO, "ok", name="clash", provider="o365")

        record = caplog.records[-1]
        assert record.name == "test.utilities"
        assert record.provider == "o365"


class TestLogException:
    def test_extracts_category_and_message(self, caplog):
        logger = logging.getLogger("test.utilities")
        with caplog.at_level(logging.ERROR, logger="test.utilities"):
            log_exception(logger, AuthError("token rejected"), "Sign-in failed")

        record = caplog.records[-1]
        assert record.error_category == "auth"
        assert record.error_type == "AuthError"
        assert record.error_message == "token rejected"
        assert record.exc_info is not None

    def test_truncates_long_messages(self, caplog):
        logger = logging.getLogger("test.utilities")
        with caplog.at_level(logging.WARNING, logger="test.utilities"):
            log_exception(
                logger,
                ValueError("x" * 600),
                "Too long",
                level=logging.WARNING,
                include_traceback=False,
            )

        record = caplog.records[-1]
        assert len(record.error_message) == 503
        assert record.exc_info is None
