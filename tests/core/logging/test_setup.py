"""Tests for logging setup."""

import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from core.logging.context import get_log_context
from core.logging.formatters import ConsoleFormatter, JSONFormatter
from core.logging.setup import NOISY_LOGGERS, get_log_file_path, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    def test_console_only_by_default(self):
        setup_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, ConsoleFormatter)

    def test_sets_provider_context(self):
        setup_logging(provider="o365")
        assert get_log_context()["provider"] == "o365"

    def test_file_handler_uses_json(self, tmp_path):
        setup_logging(log_dir=tmp_path, log_to_file=True)
        file_handlers = [
            h for h in logging.getLogger().handlers if isinstance(h, TimedRotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, JSONFormatter)

    def test_quiets_noisy_loggers(self):
        setup_logging()
        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_console_level(self):
        setup_logging(console_level=logging.ERROR)
        assert logging.getLogger().handlers[0].level == logging.ERROR


class TestHelpers:
    def test_log_file_path_layout(self, tmp_path):
        path = get_log_file_path(tmp_path, "onenote")
        assert path.parent.parent == tmp_path
        assert path.name.startswith("onenote_")
        assert path.suffix == ".log"

    def test_get_logger(self):
        assert get_logger("onenote.client") is logging.getLogger("onenote.client")
