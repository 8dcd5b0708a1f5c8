# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from datetime import datetime, timezone
from typing import Any, TextIO
import json
import logging
import sys

from kvlog.levels import Format, Level
from kvlog.options import Options
from kvlog.sinks.base import (
    INSTANCE_CALLER_DEPTH,
    Destination,
    Pairs,
    Sink,
    register_engine,
)

_LEVELNOS = {
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}


def _ordered_fields(record: logging.LogRecord) -> dict[str, Any]:
    fields = {
        "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
        "caller": f"{record.filename}:{record.lineno}",
    }
    fields.update(getattr(record, "kvlog_context", ()))
    fields["level"] = record.levelname.lower()
    fields.update(getattr(record, "kvlog_fields", ()))
    return fields


class JSONFormatter(logging.Formatter):
    """One JSON object per record, fields in record order."""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(_ordered_fields(record), default=repr, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Tab separated ``timestamp level caller message`` followed by the remaining fields as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        fields = _ordered_fields(record)
        head = [fields.pop("timestamp"), fields.pop("level").upper(), fields.pop("caller"), str(fields.pop("message", ""))]
        if fields:
            head.append(json.dumps(fields, default=repr, ensure_ascii=False))
        return "\t".join(head)


class DestinationHandler(logging.StreamHandler):
    """Stream handler that keeps write failures on the destination instead of printing them."""

    def __init__(self, destination: Destination):
        super().__init__(destination.stream)
        self.destination = destination

    def handleError(self, record: logging.LogRecord) -> None:
        self.destination.record_error(sys.exc_info()[1])


@register_engine("stdlib", "logging")
class StdlibSink(Sink):
    """Sink writing through a private :class:`logging.Logger`.

    The logger is not registered with :func:`logging.getLogger` and does not
    propagate, so application logging configuration never sees these records.
    Caller location comes from ``stacklevel``.
    """

    def __init__(
        self,
        logger: logging.Logger,
        destination: Destination,
        context: tuple[tuple[str, Any], ...] = (),
        caller_depth: int = INSTANCE_CALLER_DEPTH,
    ):
        self._logger = logger
        self._destination = destination
        self._context = context
        self._caller_depth = caller_depth

    @classmethod
    def from_options(
        cls,
        options: Options,
        stream: TextIO | None = None,
        caller_depth: int = INSTANCE_CALLER_DEPTH,
    ) -> "StdlibSink":
        destination = Destination(stream)
        handler = DestinationHandler(destination)
        if options.format == Format.CONSOLE:
            handler.setFormatter(ConsoleFormatter())
        else:
            handler.setFormatter(JSONFormatter())
        logger = logging.Logger(options.name or "kvlog", logging.DEBUG)
        logger.propagate = False
        logger.addHandler(handler)
        return cls(logger, destination, tuple(options.static_fields()), caller_depth)

    @property
    def context(self) -> dict[str, Any]:
        return dict(self._context)

    def bind(self, pairs: Pairs) -> "StdlibSink":
        return StdlibSink(self._logger, self._destination, self._context + tuple(pairs), self._caller_depth)

    def with_caller_depth(self, depth: int) -> "StdlibSink":
        return StdlibSink(self._logger, self._destination, self._context, depth)

    def log(self, level: Level, pairs: Pairs) -> None:
        message = next((value for key, value in pairs if key == "message"), "")
        # stacklevel=1 is this frame
        self._logger.log(
            _LEVELNOS[level],
            message,
            extra={"kvlog_context": self._context, "kvlog_fields": tuple(pairs)},
            stacklevel=self._caller_depth + 1,
        )

    def flush(self) -> None:
        for handler in self._logger.handlers:
            handler.flush()
        self._destination.flush()
