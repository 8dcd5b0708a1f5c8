# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

"""Process-wide logger.

Nothing is registered at import time. Call :func:`set_singleton` once while
wiring the application; until then every function here is a no-op and
:func:`get_level` returns ``Level.NONE``. Passing ``None`` unregisters.
:func:`close` flushes the registered logger but keeps it registered.
"""

from typing import Any
import threading

from kvlog.levels import Level
from kvlog.logger import ContextualLogger, Logger
from kvlog.sinks import SINGLETON_CALLER_DEPTH

_singleton: Logger | None = None
_singleton_lock = threading.Lock()


def set_singleton(logger: Logger | None) -> None:
    """Register ``logger`` as the process-wide logger, replacing any previous one.

    A :class:`~kvlog.ContextualLogger` is re-derived so the caller field
    points past the forwarding functions in this module. The registered copy
    starts at ``logger``'s current level and has its own gate; other loggers
    are registered as given.
    """
    global _singleton
    if isinstance(logger, ContextualLogger):
        logger = ContextualLogger(logger.sink.with_caller_depth(SINGLETON_CALLER_DEPTH), logger.get_level())
    with _singleton_lock:
        _singleton = logger


def get_singleton() -> Logger | None:
    return _singleton


def get_level() -> Level | int:
    logger = _singleton
    if logger is not None:
        return logger.get_level()
    return Level.NONE


def set_level(level: str) -> None:
    logger = _singleton
    if logger is not None:
        logger.set_level(level)


def debug(message: str, *kv: Any, **fields: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.debug(message, *kv, **fields)


def debugf(format: str, *args: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.debugf(format, *args)


def info(message: str, *kv: Any, **fields: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.info(message, *kv, **fields)


def infof(format: str, *args: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.infof(format, *args)


def warn(message: str, *kv: Any, **fields: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.warn(message, *kv, **fields)


def warnf(format: str, *args: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.warnf(format, *args)


def error(message: str, *kv: Any, **fields: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.error(message, *kv, **fields)


def errorf(format: str, *args: Any) -> None:
    logger = _singleton
    if logger is not None:
        logger.errorf(format, *args)


def close() -> None:
    logger = _singleton
    if logger is not None:
        logger.close()
