"""Central logging configuration for the app.

``configure_logging()`` attaches a single ``StreamHandler`` to the
``money_tracker`` logger and is called once from ``main.py``. Everything else
calls ``get_logger("money_tracker.<area>")`` and never adds handlers itself.
"""
import logging
import os
import sys
from typing import IO

ROOT_LOGGER_NAME = "money_tracker"
LOG_LEVEL_ENV = "MONEY_TRACKER_LOG_LEVEL"

_configured = False


def parse_level(level: int | str | None) -> int:
    """Accept an int, a level name or a numeric string; fall back to the env, then INFO."""
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.strip():
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = getattr(logging, name, None)
        if isinstance(numeric, int):
            return numeric
    env_val = os.getenv(LOG_LEVEL_ENV)
    if env_val and env_val != level:
        return parse_level(env_val)
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> None:
    global _configured
    if _configured:
        return

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    numeric = parse_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric)
    handler.setFormatter(
        logging.Formatter(fmt or "%(asctime)s %(name)s %(levelname)s %(message)s")
    )
    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _configured = True


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)
