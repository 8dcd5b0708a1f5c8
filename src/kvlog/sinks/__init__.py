# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from kvlog.sinks.base import (
    INSTANCE_CALLER_DEPTH,
    SINGLETON_CALLER_DEPTH,
    Destination,
    Sink,
    get_engine,
    register_engine,
)
from kvlog.sinks.structlog_sink import StructlogSink
from kvlog.sinks.stdlib_sink import StdlibSink

__all__ = [
    "INSTANCE_CALLER_DEPTH",
    "SINGLETON_CALLER_DEPTH",
    "Destination",
    "Sink",
    "StructlogSink",
    "StdlibSink",
    "get_engine",
    "register_engine",
]
