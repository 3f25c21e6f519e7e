"""Wall-clock helpers for throttled progress reporting."""

from __future__ import annotations

import time
from typing import Callable


class IntervalTimer:
    """Fire at most once per ``interval_seconds`` of wall-clock time.

    The timer starts when it is created, so the first :meth:`ready` call only
    returns ``True`` once a full interval has elapsed.

    Examples
    --------
    >>> ticks = iter([0.0, 0.2, 0.6, 0.7])
    >>> timer = IntervalTimer(0.5, clock=lambda: next(ticks))
    >>> timer.ready(), timer.ready(), timer.ready()
    (False, True, False)
    """

    def __init__(
        self,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._last = clock()

    def ready(self) -> bool:
        now = self._clock()
        if now - self._last >= self.interval_seconds:
            self._last = now
            return True
        return False


__all__ = ["IntervalTimer"]
