# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from abc import ABC, abstractmethod
from typing import Any, TextIO

from kvlog.gate import LevelGate
from kvlog.levels import Level, parse_level
from kvlog.options import Options, load_config
from kvlog.sinks import Sink, get_engine

DEFAULT_ENGINE = "structlog"
MISSING_VALUE = "(MISSING)"
# Key a call-site pair named "message" is written under, so it cannot replace the record's message
RENAMED_MESSAGE_KEY = "fields.message"


def _pairs(kv: tuple, fields: dict[str, Any]) -> list[tuple[str, Any]]:
    pairs = []
    for i in range(0, len(kv), 2):
        value = kv[i + 1] if i + 1 < len(kv) else MISSING_VALUE
        pairs.append((str(kv[i]), value))
    pairs.extend(fields.items())
    return pairs


def _call_site_pairs(kv: tuple, fields: dict[str, Any]) -> list[tuple[str, Any]]:
    return [(RENAMED_MESSAGE_KEY if key == "message" else key, value) for key, value in _pairs(kv, fields)]


def _sprintf(format: str, args: tuple) -> str:
    try:
        return format % args
    except (TypeError, ValueError):
        return f"{format} {args!r}" if args else format


class Logger(ABC):
    """A leveled structured logger.

    Safe to share between threads. Logging methods never raise; only
    :meth:`close` reports failures of the underlying destination.

    Key/value context is given either as flat pairs or as keyword fields::

        log.info("order placed", "order_id", 42, venue="xnys")

    A call-site pair named ``message`` is written under ``fields.message``;
    the record's ``message`` is always the message argument.
    """

    @abstractmethod
    def bind(self, *kv: Any, **fields: Any) -> "Logger":
        """Return a child logger whose records also carry the given fields."""
        ...

    @abstractmethod
    def get_level(self) -> Level | int:
        ...

    @abstractmethod
    def set_level(self, level: str) -> None:
        ...

    @abstractmethod
    def debug(self, message: str, *kv: Any, **fields: Any) -> None:
        ...

    @abstractmethod
    def debugf(self, format: str, *args: Any) -> None:
        ...

    @abstractmethod
    def info(self, message: str, *kv: Any, **fields: Any) -> None:
        ...

    @abstractmethod
    def infof(self, format: str, *args: Any) -> None:
        ...

    @abstractmethod
    def warn(self, message: str, *kv: Any, **fields: Any) -> None:
        ...

    @abstractmethod
    def warnf(self, format: str, *args: Any) -> None:
        ...

    @abstractmethod
    def error(self, message: str, *kv: Any, **fields: Any) -> None:
        ...

    @abstractmethod
    def errorf(self, format: str, *args: Any) -> None:
        ...

    @abstractmethod
    def close(self) -> None:
        """Flush the destination, raising its failure if it has one."""
        ...


class ContextualLogger(Logger):
    """Logger composed of a sink and a :class:`~kvlog.gate.LevelGate` in front of it.

    :meth:`bind` never changes this logger. The child gets its own gate,
    starting at this logger's level at the time of the call, so levels of
    parents, children and siblings change independently afterwards.
    """

    def __init__(self, sink: Sink, level: Level | int = Level.INFO):
        self._sink = sink
        self._gate = LevelGate(sink, level)

    @property
    def sink(self) -> Sink:
        return self._sink

    def bind(self, *kv: Any, **fields: Any) -> "ContextualLogger":
        return ContextualLogger(self._sink.bind(_pairs(kv, fields)), self.get_level())

    def get_level(self) -> Level | int:
        # The gate's policy carries its level; reading it here cannot disagree with filtering.
        return self._gate.level

    def set_level(self, level: str) -> None:
        self._gate.swap(parse_level(level))

    def _log(self, level: Level, message: str, kv: tuple, fields: dict[str, Any]) -> None:
        self._gate.log(level, [("message", message), *_call_site_pairs(kv, fields)])

    def debug(self, message: str, *kv: Any, **fields: Any) -> None:
        self._log(Level.DEBUG, message, kv, fields)

    def debugf(self, format: str, *args: Any) -> None:
        self._log(Level.DEBUG, _sprintf(format, args), (), {})

    def info(self, message: str, *kv: Any, **fields: Any) -> None:
        self._log(Level.INFO, message, kv, fields)

    def infof(self, format: str, *args: Any) -> None:
        self._log(Level.INFO, _sprintf(format, args), (), {})

    def warn(self, message: str, *kv: Any, **fields: Any) -> None:
        self._log(Level.WARN, message, kv, fields)

    def warnf(self, format: str, *args: Any) -> None:
        self._log(Level.WARN, _sprintf(format, args), (), {})

    def error(self, message: str, *kv: Any, **fields: Any) -> None:
        self._log(Level.ERROR, message, kv, fields)

    def errorf(self, format: str, *args: Any) -> None:
        self._log(Level.ERROR, _sprintf(format, args), (), {})

    def close(self) -> None:
        self._sink.flush()


class NopLogger(Logger):
    """Logger that never logs anything anywhere. Useful in tests."""

    def bind(self, *kv: Any, **fields: Any) -> "NopLogger":
        return self

    def get_level(self) -> Level:
        return Level.NONE

    def set_level(self, level: str) -> None:
        pass

    def debug(self, message: str, *kv: Any, **fields: Any) -> None:
        pass

    def debugf(self, format: str, *args: Any) -> None:
        pass

    def info(self, message: str, *kv: Any, **fields: Any) -> None:
        pass

    def infof(self, format: str, *args: Any) -> None:
        pass

    def warn(self, message: str, *kv: Any, **fields: Any) -> None:
        pass

    def warnf(self, format: str, *args: Any) -> None:
        pass

    def error(self, message: str, *kv: Any, **fields: Any) -> None:
        pass

    def errorf(self, format: str, *args: Any) -> None:
        pass

    def close(self) -> None:
        return None


def new_logger(
    options: Options | None = None,
    engine: str | None = None,
    stream: TextIO | None = None,
) -> ContextualLogger:
    """Create a root logger.

    Args:
        options: Construction options. When both ``options`` and ``engine``
            are omitted they are read with :func:`kvlog.load_config`.
        engine: Registered engine name, ``"structlog"`` by default.
        stream: Destination stream, ``sys.stdout`` by default.

    Returns:
        A :class:`ContextualLogger` at the level parsed from ``options.level``.

    Raises:
        ValueError: If no sink is registered for ``engine``.
    """
    if options is None and engine is None:
        engine, options = load_config()
    if options is None:
        options = Options()
    sink_class = get_engine(engine or DEFAULT_ENGINE)
    sink = sink_class.from_options(options, stream=stream)
    return ContextualLogger(sink, parse_level(options.level))


def new_structlog(options: Options | None = None, stream: TextIO | None = None) -> ContextualLogger:
    """Create a root logger backed by structlog."""
    return new_logger(options or Options(), "structlog", stream)


def new_stdlib(options: Options | None = None, stream: TextIO | None = None) -> ContextualLogger:
    """Create a root logger backed by the standard library ``logging`` module."""
    return new_logger(options or Options(), "stdlib", stream)


def new_nop_logger() -> NopLogger:
    return NopLogger()
