"""Progress reporting and cooperative cancellation for long runs."""

from __future__ import annotations

import enum
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

from tqdm import tqdm

from vgaanalysis.utils.time import IntervalTimer


class AnalysisCancelled(RuntimeError):
    """Raised by callers that prefer an exception for a cancelled run."""


class PollOutcome(enum.Enum):
    CONTINUE = "continue"
    CANCELLED = "cancelled"


class Communicator(ABC):
    """Channel between a running analysis and whoever started it."""

    @abstractmethod
    def post_total(self, total: int) -> None:
        """Announce how many records the run will go through."""

    @abstractmethod
    def post_current(self, current: int) -> None:
        """Announce how many records have been gone through so far."""

    @abstractmethod
    def is_cancelled(self) -> bool:
        """Return ``True`` once the caller wants the run to stop."""


class TqdmCommunicator(Communicator):
    """Communicator rendering a ``tqdm`` progress bar.

    :meth:`cancel` may be called from another thread; the run notices it at
    its next poll.
    """

    def __init__(self, desc: str = "Visibility graph", **tqdm_kwargs) -> None:
        self._desc = desc
        self._tqdm_kwargs = tqdm_kwargs
        self._bar: Optional[tqdm] = None
        self._cancelled = threading.Event()

    def post_total(self, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=total,
                desc=self._desc,
                unit="cell",
                dynamic_ncols=True,
                **self._tqdm_kwargs,
            )
        else:
            self._bar.total = total
            self._bar.refresh()

    def post_current(self, current: int) -> None:
        if self._bar is None:
            return
        delta = current - self._bar.n
        if delta > 0:
            self._bar.update(delta)

    def is_cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class ProgressPoller:
    """Throttle progress posts and cancellation checks to a fixed cadence."""

    def __init__(
        self,
        communicator: Optional[Communicator],
        interval_seconds: float = 0.5,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.communicator = communicator
        if clock is None:
            self._timer = IntervalTimer(interval_seconds)
        else:
            self._timer = IntervalTimer(interval_seconds, clock=clock)

    def start(self, total: int) -> None:
        if self.communicator is not None:
            self.communicator.post_total(total)

    def poll(self, current: int) -> PollOutcome:
        """Check for cancellation and post ``current`` when the interval elapsed."""

        if self.communicator is None or not self._timer.ready():
            return PollOutcome.CONTINUE
        if self.communicator.is_cancelled():
            return PollOutcome.CANCELLED
        self.communicator.post_current(current)
        return PollOutcome.CONTINUE

    def finish(self, current: int) -> None:
        if self.communicator is not None:
            self.communicator.post_current(current)


__all__ = [
    "AnalysisCancelled",
    "Communicator",
    "PollOutcome",
    "ProgressPoller",
    "TqdmCommunicator",
]
