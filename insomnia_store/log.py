"""Logging configuration using loguru.

Stdlib records (uvicorn, fastapi, httpx) are forwarded into loguru so the
server, the CLI, and the store share one format and one level.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from loguru import logger

_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "watchfiles")


class _InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging-module frames so loguru reports the original caller.
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "INFO", sink: TextIO | None = None) -> None:
    """Make loguru the only logging sink.

    Logs go to stderr by default: stdout is reserved for CLI output (JSON
    listings, exports) so it stays machine readable.
    """
    level = level.upper()

    logger.remove()
    logger.add(sink or sys.stderr, level=level, format=_FORMAT)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.debug("Logging configured (level={})", level)
