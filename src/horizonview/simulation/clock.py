from __future__ import annotations

import time
from typing import Callable


class FrameClock:
    """Wall-clock seconds elapsed between consecutive ticks."""

    def __init__(self, now: Callable[[], float] = time.perf_counter) -> None:
        self._now = now
        self._last = now()

    def tick(self) -> float:
        t = self._now()
        elapsed = max(t - self._last, 0.0)
        self._last = t
        return elapsed
