"""
tmplpack Logging

Thin wrapper around the standard ``logging`` module that accepts keyword
context on every call:

    logger = get_logger(__name__)
    logger.info("Collected mapping", root="/srv/site/templates", files=12)

Context is appended to the message as ``key=value`` pairs, or emitted as a
JSON object when ``configure_logging(json_format=True)`` is used.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

ROOT_LOGGER_NAME = "tmplpack"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _PlainFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{k}={v}" for k, v in context.items())
            message = f"{message} {pairs}"
        return message


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload.update(context)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TmplpackLogger:
    """Logger accepting structured keyword context."""

    def __init__(self, name: str):
        self._logger = logging.getLogger(name)

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, exc_info: bool = False, **context: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, msg, exc_info=exc_info, extra={"context": context})

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, exc_info: bool = False, **context: Any) -> None:
        self._log(logging.ERROR, msg, exc_info=exc_info, **context)


def get_logger(name: Optional[str] = None) -> TmplpackLogger:
    """Return a logger under the ``tmplpack`` namespace."""
    if not name:
        name = ROOT_LOGGER_NAME
    elif name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return TmplpackLogger(name)


def configure_logging(level: str = "info", json_format: bool = False, stream=None) -> None:
    """
    Install a single stream handler on the ``tmplpack`` logger.

    Calling this again replaces the previous handler.

    Args:
        level: One of debug, info, warn, warning, error
        json_format: Emit one JSON object per line instead of plain text
        stream: Target stream (defaults to stderr)
    """
    if level.lower() not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}. Valid levels: {', '.join(LOG_LEVELS)}")

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if json_format:
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(_PlainFormatter("%(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(LOG_LEVELS[level.lower()])
    root.propagate = False
