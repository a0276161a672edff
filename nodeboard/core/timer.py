"""Monotonic elapsed-time counter, one per project context."""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], float]


class ProjectTimer:
    """Started at project start; read at finish and on every redraw.

    Parameters
    ----------
    clock:
        Monotonic clock returning seconds.  Defaults to ``time.perf_counter``.
    """

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        self._clock = clock
        self._started_at = clock()

    @classmethod
    def start_new(cls, clock: Clock = time.perf_counter) -> ProjectTimer:
        return cls(clock)

    @property
    def elapsed_seconds(self) -> float:
        return max(self._clock() - self._started_at, 0.0)

    def __repr__(self) -> str:
        return f"ProjectTimer(elapsed={self.elapsed_seconds:.3f}s)"
