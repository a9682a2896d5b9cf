import logging

import pytest

from engine.logs import LOG_FORMAT, RunLogHandler, get_logger


def test_get_logger_configures_once():
    logger = get_logger("engine.tests.configured")
    again = get_logger("engine.tests.configured")
    assert logger is again
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
    assert logger.handlers[0].formatter._fmt == LOG_FORMAT


def test_run_log_keeps_last_entries():
    log = RunLogHandler(capacity=2)
    logger = logging.getLogger("engine.tests.capacity")
    logger.addHandler(log)
    try:
        logger.setLevel(logging.INFO)
        logger.info("one")
        logger.warning("two")
        logger.info("three", extra={"success": True})
    finally:
        logger.removeHandler(log)
    assert [(e["message"], e["level"]) for e in log.entries()] == [
        ("two", "warning"),
        ("three", "success"),
    ]
    log.clear()
    assert log.entries() == []


def test_run_log_capacity_must_be_positive():
    with pytest.raises(ValueError):
        RunLogHandler(capacity=0)
