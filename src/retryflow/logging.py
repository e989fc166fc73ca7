"""Logging helpers for retry diagnostics."""

from __future__ import annotations

import logging as py_logging
import os
import sys
from contextlib import suppress
from typing import Any, Protocol, TextIO

from retryflow.config import DEFAULT_LOG_LEVEL, LOG_LEVEL_ENV

TRACE = 5
py_logging.addLevelName(TRACE, "TRACE")

LOG_LEVELS = {
    "TRACE": TRACE,
    "DEBUG": py_logging.DEBUG,
    "INFO": py_logging.INFO,
    "WARN": py_logging.WARNING,
    "WARNING": py_logging.WARNING,
    "ERROR": py_logging.ERROR,
}
_FORMAT = "%(asctime)s %(levelname)s %(name)s:%(lineno)d %(message)s"


class LogHandler(Protocol):
    def trace(self, message: object, *args: Any) -> None: ...

    def debug(self, message: object, *args: Any) -> None: ...

    def info(self, message: object, *args: Any) -> None: ...

    def warn(self, message: object, *args: Any) -> None: ...

    def error(self, message: object, *args: Any) -> None: ...


def _normalize_level(level: str | None) -> str:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    normalized = level.strip().upper()
    if normalized == "WARNING":
        normalized = "WARN"
    return normalized


def resolve_level(level: str | None = None) -> int:
    return LOG_LEVELS.get(_normalize_level(level), py_logging.INFO)


def configure_logging(
    level: str | None = None,
    stream: TextIO | None = None,
) -> py_logging.Logger:
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)
    normalized = _normalize_level(level)
    resolved = LOG_LEVELS.get(normalized, py_logging.INFO)

    logger = py_logging.getLogger("retryflow")
    logger.setLevel(resolved)
    logger.handlers.clear()

    handler = py_logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(py_logging.Formatter(_FORMAT))
    logger.addHandler(handler)

    logger.propagate = False
    if normalized not in LOG_LEVELS:
        logger.warning('Invalid log level "%s", defaulting to "%s".', level, DEFAULT_LOG_LEVEL)
    return logger


class SafeLogger:
    """Leveled logger facade that never lets a sink failure escape.

    Wraps either a stdlib :class:`logging.Logger` or any object exposing
    ``trace``/``debug``/``info``/``warn``/``error`` methods.
    """

    def __init__(
        self,
        sink: py_logging.Logger | py_logging.LoggerAdapter | LogHandler | None = None,
    ) -> None:
        if isinstance(sink, SafeLogger):
            sink = sink.sink
        self.sink = sink if sink is not None else py_logging.getLogger("retryflow.engine")

    def _emit(self, level: str, message: object, args: tuple[Any, ...]) -> None:
        with suppress(Exception):
            if isinstance(self.sink, (py_logging.Logger, py_logging.LoggerAdapter)):
                self.sink.log(LOG_LEVELS[level.upper()], message, *args, stacklevel=3)
            else:
                getattr(self.sink, level)(message, *args)

    def trace(self, message: object, *args: Any) -> None:
        self._emit("trace", message, args)

    def debug(self, message: object, *args: Any) -> None:
        self._emit("debug", message, args)

    def info(self, message: object, *args: Any) -> None:
        self._emit("info", message, args)

    def warn(self, message: object, *args: Any) -> None:
        self._emit("warn", message, args)

    def error(self, message: object, *args: Any) -> None:
        self._emit("error", message, args)
