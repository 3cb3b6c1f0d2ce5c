import io
import logging

import pytest

from utils import logging_setup


@pytest.fixture
def fresh_logging(monkeypatch):
    logger = logging.getLogger(logging_setup.ROOT_LOGGER_NAME)
    saved = (list(logger.handlers), logger.level, logger.propagate)
    monkeypatch.setattr(logging_setup, "_configured", False)
    logger.handlers = []
    yield logger
    logger.handlers, logger.level, logger.propagate = saved[0], saved[1], saved[2]


def test_parse_level(monkeypatch):
    monkeypatch.delenv(logging_setup.LOG_LEVEL_ENV, raising=False)
    assert logging_setup.parse_level("debug") == logging.DEBUG
    assert logging_setup.parse_level(" 30 ") == 30
    assert logging_setup.parse_level(logging.ERROR) == logging.ERROR
    assert logging_setup.parse_level(None) == logging.INFO
    assert logging_setup.parse_level("nonsense") == logging.INFO

    monkeypatch.setenv(logging_setup.LOG_LEVEL_ENV, "WARNING")
    assert logging_setup.parse_level(None) == logging.WARNING


def test_get_logger_is_silent_until_configured(fresh_logging):
    logging_setup.get_logger("money_tracker.test")
    assert any(isinstance(h, logging.NullHandler) for h in fresh_logging.handlers)


def test_configure_logging_once(fresh_logging):
    stream = io.StringIO()
    logging_setup.configure_logging("DEBUG", stream=stream)
    logging_setup.configure_logging("ERROR", stream=io.StringIO())

    logging_setup.get_logger("money_tracker.test").debug("hello")

    assert "money_tracker.test DEBUG hello" in stream.getvalue()
    assert len(fresh_logging.handlers) == 1
    assert fresh_logging.propagate is False
