"""
Wall-clock capability.

Anything that needs "now" takes a Clock instead of reading time.time()
directly, so tests can pin the current time.
"""

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time in whole seconds since the Unix epoch."""
        ...


class SystemClock:
    """Clock backed by the host's wall clock."""

    def now(self) -> int:
        return int(time.time())


class FixedClock:
    """Clock that always reports the same instant. Advance it with tick()."""

    def __init__(self, timestamp: int):
        self.timestamp = int(timestamp)

    def now(self) -> int:
        return self.timestamp

    def tick(self, seconds: int = 1) -> None:
        self.timestamp += seconds
