# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from kvlog.levels import Format, Level, parse_level
from kvlog.options import Options, load_config
from kvlog.sinks import Sink, StdlibSink, StructlogSink, get_engine, register_engine
from kvlog.logger import (
    ContextualLogger,
    Logger,
    NopLogger,
    new_logger,
    new_nop_logger,
    new_stdlib,
    new_structlog,
)
from kvlog.registry import (
    close,
    debug,
    debugf,
    error,
    errorf,
    get_level,
    get_singleton,
    info,
    infof,
    set_level,
    set_singleton,
    warn,
    warnf,
)

__all__ = [
    "Format",
    "Level",
    "parse_level",
    "Options",
    "load_config",
    "Sink",
    "StructlogSink",
    "StdlibSink",
    "get_engine",
    "register_engine",
    "Logger",
    "ContextualLogger",
    "NopLogger",
    "new_logger",
    "new_structlog",
    "new_stdlib",
    "new_nop_logger",
    "set_singleton",
    "get_singleton",
    "get_level",
    "set_level",
    "debug",
    "debugf",
    "info",
    "infof",
    "warn",
    "warnf",
    "error",
    "errorf",
    "close",
]
