# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from typing import Any, TextIO

import structlog

from kvlog.levels import Format, Level
from kvlog.options import Options
from kvlog.sinks.base import (
    INSTANCE_CALLER_DEPTH,
    Destination,
    Pairs,
    Sink,
    caller,
    register_engine,
)

_METHOD_NAMES = {
    Level.DEBUG: "debug",
    Level.INFO: "info",
    Level.WARN: "warning",
    Level.ERROR: "error",
}


def _processors(fmt: Format) -> list:
    if fmt == Format.CONSOLE:
        renderer = structlog.dev.ConsoleRenderer(sort_keys=False, colors=False, event_key="message")
    else:
        renderer = structlog.processors.JSONRenderer()
    return [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        renderer,
    ]


@register_engine("structlog", "kit")
class StructlogSink(Sink):
    """Sink writing through a structlog ``PrintLogger``.

    Records are key/value dicts run through structlog processors: the level
    and an ISO-8601 UTC timestamp are added, then the record is rendered as
    JSON or as console text.
    """

    def __init__(
        self,
        printer: structlog.PrintLogger,
        processors: list,
        destination: Destination,
        context: dict[str, Any],
        caller_depth: int = INSTANCE_CALLER_DEPTH,
    ):
        self._printer = printer
        self._processors = processors
        self._destination = destination
        self._context = context
        self._caller_depth = caller_depth

    @classmethod
    def from_options(
        cls,
        options: Options,
        stream: TextIO | None = None,
        caller_depth: int = INSTANCE_CALLER_DEPTH,
    ) -> "StructlogSink":
        destination = Destination(stream)
        # timestamp and caller are filled per record; reserving the keys here
        # keeps them first in every record.
        context: dict[str, Any] = {"timestamp": None, "caller": None}
        context.update(options.static_fields())
        return cls(
            structlog.PrintLogger(destination.stream),
            _processors(options.format),
            destination,
            context,
            caller_depth,
        )

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, pairs: Pairs) -> "StructlogSink":
        context = dict(self._context)
        context.update(pairs)
        return StructlogSink(self._printer, self._processors, self._destination, context, self._caller_depth)

    def with_caller_depth(self, depth: int) -> "StructlogSink":
        return StructlogSink(self._printer, self._processors, self._destination, self._context, depth)

    def log(self, level: Level, pairs: Pairs) -> None:
        record = dict(self._context)
        record["caller"] = caller(self._caller_depth)
        record["level"] = None
        record.update(pairs)
        bound = structlog.BoundLogger(self._printer, self._processors, record)
        try:
            getattr(bound, _METHOD_NAMES[level])()
        except Exception as exc:
            self._destination.record_error(exc)

    def flush(self) -> None:
        self._destination.flush()
