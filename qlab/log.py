"""Logger factory for qlab modules.

Every module asks for ``get_logger(__name__)``; loggers share the ``qlab``
prefix and a single stderr handler configured from :mod:`qlab.config`.
"""

import logging
import sys
from typing import Dict, Optional

from .config import LOG_FORMAT, LOG_LEVEL

# Name of the stderr handler attached to every qlab logger
HANDLER_NAME = "qlab"

_loggers: Dict[str, logging.Logger] = {}


def _level(value: int | str) -> int:
    if isinstance(value, str):
        return getattr(logging, value.upper(), logging.WARNING)
    return value


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name`` under the ``qlab`` hierarchy."""
    if name is None:
        name = "qlab"
    logger_name = name if name == "qlab" or name.startswith("qlab.") else f"qlab.{name}"
    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not any(h.get_name() == HANDLER_NAME for h in logger.handlers):
        level = _level(LOG_LEVEL)
        logger.setLevel(level)
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every logger handed out so far."""
    level = _level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            if handler.get_name() == HANDLER_NAME:
                handler.setLevel(level)
