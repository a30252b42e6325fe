"""
Docgen logger.

Wraps loguru with an automatic [docgen] prefix. Pipeline components accept
an injected sink that needs only an info method; missing levels are filled
in by as_sink. Without a sink they fall back to DEFAULT_LOG.
"""

from __future__ import annotations

from typing import Any, Protocol

from loguru import logger

CONTEXT_PREFIX = "[docgen]"


class LogSink(Protocol):
    def info(self, message: str) -> None: ...


def _log_info(message: str) -> None:
    """Log info message with [docgen] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [docgen] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [docgen] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [docgen] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


class _PrefixedLogger:
    """Default sink routing through the prefixed loguru wrappers."""

    info = staticmethod(_log_info)
    warning = staticmethod(_log_warning)
    error = staticmethod(_log_error)
    debug = staticmethod(_log_debug)


DEFAULT_LOG = _PrefixedLogger()


class _SinkAdapter:
    """Give an info-only sink the full info/warning/error/debug surface.

    warning falls back to a ``warn`` method; levels the sink lacks are dropped.
    """

    def __init__(self, sink: LogSink):
        self._sink = sink

    def _level(self, *names: str) -> Any:
        for name in names:
            fn = getattr(self._sink, name, None)
            if callable(fn):
                return fn
        return None

    def info(self, message: str) -> None:
        self._sink.info(message)

    def warning(self, message: str) -> None:
        fn = self._level("warning", "warn")
        if fn is not None:
            fn(message)

    def error(self, message: str) -> None:
        fn = self._level("error")
        if fn is not None:
            fn(message)

    def debug(self, message: str) -> None:
        fn = self._level("debug")
        if fn is not None:
            fn(message)


def as_sink(log: LogSink | None) -> Any:
    """Return a sink with every level, wrapping log or using DEFAULT_LOG."""
    if log is None:
        return DEFAULT_LOG
    if isinstance(log, (_PrefixedLogger, _SinkAdapter)):
        return log
    return _SinkAdapter(log)
