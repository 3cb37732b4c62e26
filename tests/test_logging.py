"""
Tests for logging configuration.
"""

import logging

import pytest

from pushclient.core.config import PushSettings
from pushclient.core.context import cycle_context, get_cycle_id, new_cycle_id
from pushclient.core.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_package_level():
    logger = logging.getLogger("pushclient")
    level = logger.level
    yield
    logger.setLevel(level)


def _make_record():
    return logging.getLogRecordFactory()("pushclient", logging.INFO, __file__, 1, "msg", (), None)


class TestConfigureLogging:
    def test_returns_package_logger_with_level(self):
        logger = configure_logging(PushSettings(log_level="warning"))

        assert logger.name == "pushclient"
        assert logger.level == logging.WARNING

    def test_debug_flag_overrides_configured_level(self):
        logger = configure_logging(PushSettings(log_level="error"), debug=True)

        assert logger.level == logging.DEBUG

    def test_records_carry_cycle_id(self):
        configure_logging(PushSettings())

        with cycle_context("abc123"):
            record = _make_record()
        outside = _make_record()

        assert record.cycle_id == "abc123"
        assert outside.cycle_id == "-"
        assert get_cycle_id() is None

    def test_repeated_configuration_keeps_one_factory(self):
        configure_logging(PushSettings())
        factory = logging.getLogRecordFactory()

        configure_logging(PushSettings())

        assert logging.getLogRecordFactory() is factory


class TestCycleContext:
    def test_none_keeps_enclosing_cycle(self):
        with cycle_context("outer"):
            with cycle_context(None):
                assert get_cycle_id() == "outer"

    def test_new_ids_are_short_and_distinct(self):
        first, second = new_cycle_id(), new_cycle_id()

        assert len(first) == 8
        assert first != second
