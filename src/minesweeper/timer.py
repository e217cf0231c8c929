"""
Periodic tick drivers for the game clock.

The engine only needs ``start`` and ``stop``; how ticks are produced is
up to the driver. ``ThreadingTicker`` re-arms a ``threading.Timer`` after
every tick, ``ManualTicker`` fires only when asked.
"""
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[], None]


class Ticker(ABC):
    """Abstract periodic tick source."""

    @abstractmethod
    def start(self) -> None:
        """Begin producing ticks."""

    @abstractmethod
    def stop(self) -> None:
        """Stop producing ticks. Safe to call more than once."""

    @property
    @abstractmethod
    def running(self) -> bool:
        """Whether the ticker is started."""


class ThreadingTicker(Ticker):
    """
    Ticker backed by a chain of daemon ``threading.Timer`` objects.

    A tick already in flight when ``stop`` is called may still invoke the
    callback; consumers must tolerate one late tick.
    """

    def __init__(self, interval_s: float, callback: TickCallback) -> None:
        self.interval_s = interval_s
        self._callback = callback
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._running = False

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    @property
    def running(self) -> bool:
        return self._running

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval_s, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        # Re-arm before running the callback so a failing callback
        # does not stop the clock.
        with self._lock:
            if not self._running:
                return
            self._schedule()
        self._callback()


class ManualTicker(Ticker):
    """Ticker that fires only through ``fire()``; for headless drivers."""

    def __init__(self, callback: TickCallback) -> None:
        self._callback = callback
        self._running = False
        self.fired = 0

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def fire(self) -> bool:
        """Run the callback once if started. Returns True if it ran."""
        if not self._running:
            return False
        self.fired += 1
        self._callback()
        return True
