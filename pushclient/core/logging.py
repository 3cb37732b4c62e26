"""Logging setup for the push client and its CLI."""
import logging
import sys

from pushclient.core.config import PushSettings
from pushclient.core.context import get_cycle_id

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [cycle=%(cycle_id)s] %(message)s"


def _install_cycle_factory() -> None:
    current = logging.getLogRecordFactory()
    if getattr(current, "stamps_cycle_id", False):
        return

    def record_factory(*args, **kwargs) -> logging.LogRecord:
        record = current(*args, **kwargs)
        record.cycle_id = get_cycle_id() or "-"
        return record

    record_factory.stamps_cycle_id = True
    logging.setLogRecordFactory(record_factory)


def configure_logging(
    settings: PushSettings, *,
    debug: bool = False,
    logger_name: str = "pushclient",
) -> logging.Logger:
    """Send logs to stderr, each line tagged with its registration cycle.

    stdout stays free for the CLI's output. ``debug`` overrides the
    configured level. Calling this again does not stack record factories.
    """

    level_name = "DEBUG" if debug else settings.log_level.upper()
    log_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    _install_cycle_factory()

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.debug("Logging configured with level %s", logging.getLevelName(log_level))
    return logger
