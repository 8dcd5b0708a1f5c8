# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, TextIO
import sys
import threading

from kvlog.diagnostics import get_logger
from kvlog.levels import Level

if TYPE_CHECKING:
    from kvlog.options import Options

logger = get_logger(__name__)

Pairs = Sequence[tuple[str, Any]]

# Frames between Sink.log and the application code that asked for the record:
# Sink.log <- LevelGate.log <- ContextualLogger._log <- ContextualLogger.info <- caller
INSTANCE_CALLER_DEPTH = 4
# The registry's free functions add one more frame.
SINGLETON_CALLER_DEPTH = INSTANCE_CALLER_DEPTH + 1


def caller(depth: int) -> str:
    """Return ``file.py:line`` for the frame ``depth`` levels above the function calling this one."""
    frame = sys._getframe(1)
    for _ in range(depth):
        if frame.f_back is None:
            break
        frame = frame.f_back
    filename = frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1]
    return f"{filename}:{frame.f_lineno}"


class Destination:
    """A stream shared by a root sink and every sink derived from it.

    Write failures are kept here instead of being raised at the log call;
    :meth:`flush` reports them.
    """

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()
        self._error: Exception | None = None

    def record_error(self, exc: Exception) -> None:
        with self._lock:
            first = self._error is None
            if first:
                self._error = exc
        if first:
            try:
                logger.warning("Write to log destination failed, reporting on close", error=repr(exc))
            except (OSError, ValueError):
                # stderr is unusable as well; flush() still raises exc
                pass

    def flush(self) -> None:
        self.stream.flush()
        with self._lock:
            error, self._error = self._error, None
        if error is not None:
            raise error


class Sink(ABC):
    """A logging engine behind the minimal record contract.

    Static fields (timestamp, caller, logger name, deployment metadata and
    tags) are fixed at construction. :meth:`bind` derives a sink that also
    carries context fields; the original is never changed.
    """

    @classmethod
    def from_options(
        cls,
        options: "Options",
        stream: TextIO | None = None,
        caller_depth: int = INSTANCE_CALLER_DEPTH,
    ) -> "Sink":
        """Build a root sink for ``options`` writing to ``stream`` (stdout by default)."""
        raise NotImplementedError()

    @abstractmethod
    def log(self, level: Level, pairs: Pairs) -> None:
        """Write one record. Must not raise for write failures."""
        ...

    @abstractmethod
    def bind(self, pairs: Pairs) -> "Sink":
        """Return a sink whose records carry ``pairs`` after the existing context."""
        ...

    def with_caller_depth(self, depth: int) -> "Sink":
        """Return a sink that reports the caller ``depth`` frames above :meth:`log`."""
        return self

    def flush(self) -> None:
        """Flush the destination, raising any write failure seen since the last flush."""
        return None


# Registered sink classes, by engine name
_ENGINES: dict[str, type[Sink]] = {}


def register_engine(*names: str):
    """Decorator to register a sink class under one or more engine names."""
    def decorator(sink_class):
        for name in names:
            _ENGINES[name.lower()] = sink_class
        return sink_class
    return decorator


def get_engine(name: str) -> type[Sink]:
    """Get the sink class registered for an engine name."""
    if name.lower() not in _ENGINES:
        raise ValueError(f"No sink registered for engine: {name}")
    return _ENGINES[name.lower()]
