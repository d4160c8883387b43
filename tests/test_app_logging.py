"""Tests for logging configuration."""

import logging

from fitness_tracker.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_adds_a_single_handler() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    configure_logging("debug")

    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.propagate is False
