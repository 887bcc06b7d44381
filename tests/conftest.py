"""
Test Configuration

Shared fixtures. Every test runs in an empty temporary directory with
GROQ_* and TASKPLANNER_* variables removed, so no developer .env or
shell configuration leaks in.
"""

import os

import pytest

from taskplanner.config.settings import get_settings
from taskplanner.observability.logging import BufferHandler, LogLevel, configure_logging
from tests.fixtures import RecordingSleep, make_config


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    for name in list(os.environ):
        if name.startswith(("GROQ_", "TASKPLANNER_")):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    configure_logging()


@pytest.fixture
def log_buffer():
    """Capture every log record at DEBUG and above."""
    buffer = BufferHandler()
    configure_logging(LogLevel.DEBUG, handlers=[buffer])
    return buffer


@pytest.fixture
def strategy_config():
    return make_config()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
