# -*- coding: utf-8 -*-
from __future__ import annotations

import io
import logging

import pytest

from core.logging_config import NAMESPACE, resolve_level, setup_logging


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Fixtures
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@pytest.fixture
def namespace_logger():
    """Restore the namespace logger so caplog keeps working elsewhere."""
    logger = logging.getLogger(NAMESPACE)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Tests - Logging Setup
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TestSetupLogging:

    def test_writes_formatted_lines(self, namespace_logger):
        """Namespace loggers write to the configured stream."""
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream)
        logging.getLogger("applife.test").debug("hello")
        assert "[DEBUG   ] applife.test: hello" in stream.getvalue()

    def test_repeat_call_does_not_duplicate(self, namespace_logger):
        """Calling twice leaves a single console handler."""
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)
        setup_logging("INFO", stream=stream)
        logging.getLogger("applife.test").info("once")
        assert stream.getvalue().count("once") == 1

    def test_level_applied(self, namespace_logger):
        """The namespace logger uses the requested level."""
        setup_logging("WARNING", stream=io.StringIO())
        assert namespace_logger.level == logging.WARNING
        assert namespace_logger.propagate is False


class TestResolveLevel:

    def test_names_and_numbers(self):
        """Level names are case-insensitive; numbers pass through."""
        assert resolve_level("debug") == logging.DEBUG
        assert resolve_level(logging.ERROR) == logging.ERROR

    def test_unknown_falls_back_to_info(self):
        """An unknown name resolves to INFO."""
        assert resolve_level("LOUD") == logging.INFO

    def test_env_default(self, monkeypatch):
        """Without a level the LOG_LEVEL variable is used."""
        monkeypatch.setenv("LOG_LEVEL", "error")
        assert resolve_level(None) == logging.ERROR
