# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

import enum


class Level(enum.IntEnum):
    """Logging levels, ordered by increasing verbosity.

    ``NONE`` admits nothing and ``DEBUG`` admits everything.
    """
    NONE = 0
    ERROR = 1
    WARN = 2
    INFO = 3
    DEBUG = 4


class Format(str, enum.Enum):
    """Record encoding used by a sink."""
    JSON = "json"
    CONSOLE = "console"


_LEVELS_BY_NAME = {
    "debug": Level.DEBUG,
    "": Level.INFO,  # default
    "info": Level.INFO,
    "warn": Level.WARN,
    "error": Level.ERROR,
    "none": Level.NONE,
}


def parse_level(text: str) -> Level:
    """Parse a level name, case-insensitively.

    Never fails. An empty string means ``Level.INFO``; anything that is not a
    known name means ``Level.NONE``, so a typo in configuration silences
    logging instead of flooding the output.
    """
    return _LEVELS_BY_NAME.get(text.lower(), Level.NONE)
