"""Logging configuration utilities.

``configure_logging`` sets up the root logger once per run; modules obtain
their own loggers through ``get_logger("ew.<area>")``.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Literal

LogOutput = Literal["stdout", "file", "both"]
LogFormat = Literal["text", "json"]

DEFAULT_LOG_FILE = "logs/earnings-watch.log"

_FORMATS = {
    "text": "%(asctime)s | %(levelname)s | %(name)s | %(filename)s:%(lineno)d | %(message)s",
    "json": (
        '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", '
        '"file": "%(filename)s:%(lineno)d", "message": "%(message)s"}'
    ),
}


def _build_handlers(output: str, file_path: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if output in ("stdout", "both"):
        handlers.append(logging.StreamHandler(sys.stdout))
    if output in ("file", "both"):
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(file_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
        )
    return handlers


def configure_logging(
    level: str | int | None = None,
    output: LogOutput | None = None,
    file_path: str | None = None,
    log_format: LogFormat | None = None,
) -> None:
    """Configure the root logger.

    Arguments left as ``None`` fall back to ``LOG_LEVEL`` (INFO),
    ``LOG_OUTPUT`` (file), ``LOG_FILE_PATH`` and ``LOG_FORMAT`` (text), read
    at call time so a ``.env`` loaded by ``main`` applies.
    """
    level = level or os.environ.get("LOG_LEVEL", "INFO").upper()
    output = output or os.environ.get("LOG_OUTPUT", "file").lower()
    file_path = file_path or os.environ.get("LOG_FILE_PATH") or DEFAULT_LOG_FILE
    log_format = log_format or os.environ.get("LOG_FORMAT", "text").lower()

    formatter = logging.Formatter(_FORMATS.get(log_format, _FORMATS["text"]))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in _build_handlers(output, file_path):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)
