from __future__ import annotations

import logging
import os
import sys

_FORMAT = "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"
_DATE_FORMAT = "%m-%d %H:%M:%S"

_root_logger = logging.getLogger("index_minpq")
_default_handler: logging.Handler | None = None


def _setup_logger() -> None:
    global _default_handler
    _root_logger.setLevel(os.environ.get("IMPQ_LOG_LEVEL", "WARNING").upper())
    if _root_logger.handlers:
        _root_logger.handlers.clear()
    _default_handler = logging.StreamHandler(sys.stdout)
    _default_handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    _root_logger.addHandler(_default_handler)
    _root_logger.propagate = False


_setup_logger()


def init_logger(name: str) -> logging.Logger:
    # Loggers outside the package get the shared handler attached directly.
    logger = logging.getLogger(name)
    if not name.startswith(_root_logger.name) and _default_handler not in logger.handlers:
        logger.addHandler(_default_handler)  # type: ignore[arg-type]
        logger.setLevel(_root_logger.level)
        logger.propagate = False
    return logger


def set_log_level(level: str | int) -> None:
    if isinstance(level, str):
        level = level.upper()
    _root_logger.setLevel(level)
    for logger in logging.Logger.manager.loggerDict.values():
        if isinstance(logger, logging.Logger) and _default_handler in logger.handlers:
            logger.setLevel(level)
