# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

# Diagnostics about kvlog itself (config resolution, failing destinations).
# These never go to the application's loggers, and structlog's global
# configuration is left to the application.

import logging
import sys

import structlog

_PROCESSORS = [
    structlog.processors.add_log_level,
    structlog.processors.StackInfoRenderer(),
    structlog.dev.set_exc_info,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
    structlog.dev.ConsoleRenderer(sort_keys=False, colors=False),
]


def get_logger(rel: str | None = None) -> structlog.typing.FilteringBoundLogger:
    name = "kvlog" if not rel else rel if rel.startswith("kvlog") else f"kvlog.{rel}"
    return structlog.wrap_logger(
        structlog.PrintLogger(sys.stderr),
        processors=_PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        context_class=dict,
        cache_logger_on_first_use=False,
    ).bind(logger=name)
