"""Background sweeper that drops expired memoizer entries."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

logger = logging.getLogger("booltmemo")

MIN_INTERVAL_SECONDS = 1.0


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def janitor_interval(true_ttl: float, false_ttl: float) -> float:
    return max(MIN_INTERVAL_SECONDS, min(true_ttl, false_ttl) / 2)


def _daemon_timer(interval: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, callback)
    timer.daemon = True
    return timer


class Janitor:
    """One-shot timer that re-arms itself after every sweep until stopped.

    ``sweep`` is called with ``lock`` held. The timer handle is only read or
    replaced under the same lock, so a callback that fires while ``stop`` runs
    finds the handle cleared and does not re-arm.
    """

    def __init__(
        self,
        interval: float,
        sweep: Callable[[], int],
        lock: threading.Lock,
        *,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self.interval = float(interval)
        self._sweep = sweep
        self._lock = lock
        self._timer_factory = timer_factory if timer_factory is not None else _daemon_timer
        self._timer: TimerHandle | None = None
        self._cancelled = False
        self.firings = 0

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        with self._lock:
            if self._cancelled or self._timer is not None:
                return
            self._schedule()
        logger.debug("Janitor started (interval %.3fs)", self.interval)

    def _schedule(self) -> None:
        timer = self._timer_factory(self.interval, self._fire)
        self._timer = timer
        timer.start()

    def _fire(self) -> None:
        with self._lock:
            if self._timer is None:
                return
            removed = self._sweep()
            self.firings += 1
            if removed:
                logger.debug("Janitor removed %d expired entries", removed)
            self._schedule()

    def stop(self) -> None:
        with self._lock:
            self._cancelled = True
            timer, self._timer = self._timer, None
        if timer is None:
            return
        timer.cancel()
        logger.debug("Janitor stopped")
