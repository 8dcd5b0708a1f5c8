# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

import io
import json

import pytest

from kvlog.sinks import INSTANCE_CALLER_DEPTH, Sink


class RecordingSink(Sink):
    """Sink double that keeps every record it receives.

    Derived sinks append to the same ``records`` and ``flushes`` lists, like
    sinks sharing a destination.
    """

    def __init__(self, context=(), records=None, flush_error=None, caller_depth=INSTANCE_CALLER_DEPTH, flushes=None):
        self.context = tuple(context)
        self.records = records if records is not None else []
        self.flushes = flushes if flushes is not None else []
        self.flush_error = flush_error
        self.caller_depth = caller_depth

    @property
    def flushed(self):
        return len(self.flushes)

    def log(self, level, pairs):
        self.records.append((level, [*self.context, *pairs]))

    def _derive(self, context, caller_depth):
        return RecordingSink(context, self.records, self.flush_error, caller_depth, self.flushes)

    def bind(self, pairs):
        return self._derive(self.context + tuple(pairs), self.caller_depth)

    def with_caller_depth(self, depth):
        return self._derive(self.context, depth)

    def flush(self):
        self.flushes.append(self.caller_depth)
        if self.flush_error is not None:
            raise self.flush_error


class BrokenStream(io.StringIO):
    """Stream whose writes always fail with the same exception instance."""

    def __init__(self, error):
        super().__init__()
        self.error = error

    def write(self, s):
        raise self.error


class FlushFailingStream(io.StringIO):
    """Stream that accepts writes but whose flushes fail with the same exception instance."""

    def __init__(self, error):
        super().__init__()
        self.error = error

    def flush(self):
        raise self.error


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def read_records():
    """Parse every JSON line written to a StringIO."""

    def read(stream: io.StringIO) -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines() if line]

    return read


@pytest.fixture
def make_logger():
    """Factory for a ContextualLogger over a fresh RecordingSink."""
    from kvlog import ContextualLogger, Level

    def factory(level=Level.DEBUG, **kwargs):
        sink = RecordingSink(**kwargs)
        return ContextualLogger(sink, level), sink

    return factory


@pytest.fixture
def broken_stream():
    return BrokenStream


@pytest.fixture
def flush_failing_stream():
    return FlushFailingStream
