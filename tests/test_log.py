"""Tests for the logging helper (utils/log.py)."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator

import pytest

from subdispatch.utils.log import configure_logging


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    logger = logging.getLogger("subdispatch")
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestConfigureLogging:
    def test_verbose_emits_debug(self, package_logger: logging.Logger) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        logging.getLogger("subdispatch.core.registry").debug("registered %s", "build")
        text = stream.getvalue()
        assert "DEBUG subdispatch.core.registry: registered build" in text

    def test_quiet_drops_debug(self, package_logger: logging.Logger) -> None:
        stream = io.StringIO()
        configure_logging(stream=stream)
        logging.getLogger("subdispatch.cli").debug("hidden")
        logging.getLogger("subdispatch.cli").warning("shown")
        assert "hidden" not in stream.getvalue()
        assert "shown" in stream.getvalue()

    def test_second_call_replaces_handler(self, package_logger: logging.Logger) -> None:
        first = configure_logging(stream=io.StringIO())
        second = configure_logging(stream=io.StringIO())
        assert first not in package_logger.handlers
        assert second in package_logger.handlers
