"""Monotonic tick source."""

from __future__ import annotations

import time
from collections.abc import Callable


class Clock:
    """Produces elapsed-time ticks at a fixed interval.

    The clock knows nothing about sessions: it only reports how long it
    has been since the previous tick and when the next one is due.
    """

    def __init__(
        self,
        interval: float = 0.25,
        now: Callable[[], float] | None = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = interval
        self._now = now or time.monotonic
        self._last = self._now()

    def time_until_tick(self) -> float:
        """Seconds until the next tick is due; 0 when it is overdue."""
        return max(0.0, self.interval - (self._now() - self._last))

    def is_due(self) -> bool:
        return self.time_until_tick() <= 0

    def tick(self) -> float:
        """Consume a tick and return the real time elapsed since the last one."""
        now = self._now()
        elapsed = max(0.0, now - self._last)
        self._last = now
        return elapsed
