# Copyright (c) 2025 Krnel
# Points of Contact:
#   - kimmy@krnel.ai

from dataclasses import dataclass
import threading

from kvlog.levels import Level
from kvlog.sinks.base import Pairs, Sink


@dataclass(frozen=True)
class FilterPolicy:
    """
    Immutable filtering decision for one threshold.

    ``allowed`` is ``None`` when the threshold is not a known :class:`Level`,
    in which case every record passes.
    """
    level: Level | int
    allowed: frozenset[Level] | None

    @classmethod
    def for_level(cls, level: Level | int) -> "FilterPolicy":
        try:
            level = Level(level)
        except ValueError:
            return cls(level, None)
        return cls(level, frozenset(candidate for candidate in Level if Level.NONE < candidate <= level))

    def allows(self, level: Level) -> bool:
        return self.allowed is None or level in self.allowed


class LevelGate:
    """Filters records on their way to a sink.

    The active :class:`FilterPolicy` is replaced as a whole by :meth:`swap`.
    A log call reads the policy reference once, so it sees either the old or
    the new policy and never a mix. Only writers take the lock.
    """

    def __init__(self, sink: Sink, level: Level | int):
        self._sink = sink
        self._policy = FilterPolicy.for_level(level)
        self._swap_lock = threading.Lock()

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def policy(self) -> FilterPolicy:
        return self._policy

    @property
    def level(self) -> Level | int:
        return self._policy.level

    def swap(self, level: Level | int) -> FilterPolicy:
        """Install the policy for ``level`` and return the one it replaced."""
        policy = FilterPolicy.for_level(level)
        with self._swap_lock:
            previous, self._policy = self._policy, policy
        return previous

    def log(self, level: Level, pairs: Pairs) -> None:
        if self._policy.allows(level):
            self._sink.log(level, pairs)
