"""
Client id generation.

Ids are creation timestamps in epoch milliseconds, kept as strings so they
stay opaque to everything but this module.
"""

import time
from typing import Callable, Collection, Optional


class TimestampIdGenerator:
    """
    Issue ids from the wall clock, never repeating one.

    Two creations inside the same millisecond (or a clock that steps
    backwards) would collide on the raw timestamp, so an id is bumped to
    one past the last issued id whenever the clock has not moved past it.
    Ids already present in the store are skipped as well, which covers
    records written by an earlier process.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last: Optional[int] = None

    def next_id(self, existing: Collection[str] = ()) -> str:
        candidate = int(self._clock() * 1000)
        if self._last is not None and candidate <= self._last:
            candidate = self._last + 1

        while str(candidate) in existing:
            candidate += 1

        self._last = candidate
        return str(candidate)
