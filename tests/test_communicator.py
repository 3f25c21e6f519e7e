"""Tests for progress reporting and cancellation polling."""

import io

from vgaanalysis.communicator import (
    Communicator,
    PollOutcome,
    ProgressPoller,
    TqdmCommunicator,
)
from vgaanalysis.utils.time import IntervalTimer


class RecordingCommunicator(Communicator):
    def __init__(self, cancel_after=None):
        self.totals = []
        self.currents = []
        self.checks = 0
        self.cancel_after = cancel_after

    def post_total(self, total):
        self.totals.append(total)

    def post_current(self, current):
        self.currents.append(current)

    def is_cancelled(self):
        self.checks += 1
        return self.cancel_after is not None and self.checks > self.cancel_after


class FakeClock:
    def __init__(self, *ticks):
        self._ticks = iter(ticks)

    def __call__(self):
        return next(self._ticks)


class TestIntervalTimer:
    """Test the wall-clock throttle."""

    def test_fires_once_per_interval(self):
        """Test the timer fires at most once per interval."""
        timer = IntervalTimer(0.5, clock=FakeClock(0.0, 0.2, 0.5, 0.7, 1.2))

        assert [timer.ready() for _ in range(4)] == [False, True, False, True]

    def test_zero_interval_always_fires(self):
        """Test a zero interval fires on every check."""
        timer = IntervalTimer(0.0, clock=FakeClock(1.0, 1.0, 1.0))

        assert timer.ready() and timer.ready()


class TestProgressPoller:
    """Test throttled posting and cancellation outcomes."""

    def test_without_communicator(self):
        """Test polling without a communicator never cancels."""
        poller = ProgressPoller(None)

        poller.start(10)
        assert poller.poll(1) is PollOutcome.CONTINUE
        poller.finish(10)

    def test_posts_only_when_interval_elapsed(self):
        """Test progress is posted only once the interval has passed."""
        comm = RecordingCommunicator()
        poller = ProgressPoller(comm, 0.5, clock=FakeClock(0.0, 0.1, 0.6, 0.8))

        poller.start(3)
        outcomes = [poller.poll(n) for n in (1, 2, 3)]
        poller.finish(3)

        assert outcomes == [PollOutcome.CONTINUE] * 3
        assert comm.totals == [3]
        assert comm.currents == [2, 3]
        assert comm.checks == 1

    def test_cancellation(self):
        """Test a cancelled communicator is reported by the poller."""
        comm = RecordingCommunicator(cancel_after=1)
        poller = ProgressPoller(comm, 0.0)

        assert poller.poll(1) is PollOutcome.CONTINUE
        assert poller.poll(2) is PollOutcome.CANCELLED
        assert comm.currents == [1]


class TestTqdmCommunicator:
    """Test the progress bar communicator."""

    def test_progress_and_cancel(self):
        """Test the tqdm communicator tracks progress and cancellation."""
        comm = TqdmCommunicator(file=io.StringIO())

        comm.post_total(4)
        comm.post_current(2)
        comm.post_current(1)
        comm.post_current(4)

        assert comm._bar.total == 4
        assert comm._bar.n == 4
        assert comm.is_cancelled() is False

        comm.cancel()
        assert comm.is_cancelled() is True
        comm.close()

    def test_post_current_before_total_is_ignored(self):
        """Test progress posted before a total is known is dropped."""
        comm = TqdmCommunicator(file=io.StringIO())

        comm.post_current(3)
        comm.close()
