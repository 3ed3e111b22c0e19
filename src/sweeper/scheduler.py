"""
Callback scheduling for timed game effects.

The explosion cascade and the game clock only need "run this
callback after N milliseconds". Front ends pick the implementation
that matches their event loop.
"""
import heapq
import itertools
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Tuple


Callback = Callable[[], None]


# ============================================================================
# Scheduler Interface
# ============================================================================

class Scheduler(ABC):
    """Schedules fire-and-forget callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callback) -> None:
        """
        Run ``callback`` once, ``delay_ms`` milliseconds from now.

        Args:
            delay_ms: Delay in milliseconds, zero or more.
            callback: Function taking no arguments.
        """
        pass


# ============================================================================
# Manual Scheduler
# ============================================================================

class ManualScheduler(Scheduler):
    """
    Scheduler driven by a virtual clock.

    Nothing fires until ``advance`` or ``run_all`` is called. Callbacks
    fire in due-time order; ties fire in submission order.
    """

    def __init__(self) -> None:
        self.now = 0
        self._queue: List[Tuple[int, int, Callback]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: int, callback: Callback) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        heapq.heappush(
            self._queue, (self.now + delay_ms, next(self._counter), callback)
        )

    @property
    def pending(self) -> int:
        """Number of callbacks waiting to fire."""
        return len(self._queue)

    def advance(self, delay_ms: int) -> int:
        """
        Move the clock forward, firing every callback that comes due.

        Callbacks scheduled while advancing fire too if they fall due
        inside the window.

        Returns:
            Number of callbacks fired.
        """
        target = self.now + delay_ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self) -> int:
        """
        Fire every pending callback, advancing the clock as needed.

        Returns:
            Number of callbacks fired.
        """
        fired = 0
        while self._queue:
            due, _, callback = heapq.heappop(self._queue)
            self.now = due
            callback()
            fired += 1
        return fired


# ============================================================================
# Threading Scheduler
# ============================================================================

class ThreadingScheduler(Scheduler):
    """Scheduler backed by one daemon ``threading.Timer`` per callback."""

    def __init__(self) -> None:
        self.timers: List[threading.Timer] = []

    def call_later(self, delay_ms: int, callback: Callback) -> None:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        self.timers = [t for t in self.timers if t.is_alive()]
        self.timers.append(timer)

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for every timer started so far to finish."""
        for timer in list(self.timers):
            timer.join(timeout)
