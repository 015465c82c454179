"""
pytest configuration for the OneNote client tests.

Adds src directory to Python path for imports and keeps the environment
from leaking configuration into tests.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

from core.logging import clear_log_context  # noqa: E402

ONENOTE_ENV_VARS = (
    "ONENOTE_CONFIG",
    "ONENOTE_AUTH_PROVIDER",
    "ONENOTE_USE_BETA",
    "ONENOTE_MSA_CLIENT_ID",
    "ONENOTE_O365_CLIENT_ID",
    "ONENOTE_INTERACTIVE_MODE",
    "ONENOTE_MSA_ME_ENDPOINT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Drop ONENOTE_* variables and reset the log context around each test."""
    for name in ONENOTE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def caplog_debug(caplog):
    caplog.set_level(logging.DEBUG)
    return caplog
