"""
Unit id generation.

Ids are stable handles: the battlefield and controllers always refer to
units through them, never through list positions.
"""

import itertools
from typing import Iterator


class UnitIdGenerator:
    """Monotonic id source wrapping ``itertools.count``."""

    def __init__(self, start: int = 1):
        self._counter: Iterator[int] = itertools.count(start)

    def next_id(self) -> int:
        return next(self._counter)

    def reset(self, start: int = 1) -> None:
        self._counter = itertools.count(start)


_default_generator = UnitIdGenerator()


def next_unit_id() -> int:
    """Get the next id from the process-wide generator."""
    return _default_generator.next_id()


def reset_unit_ids(start: int = 1) -> None:
    """Restart the process-wide generator (tests use this for readable ids)."""
    _default_generator.reset(start)
