"""Boolean memoizer with separate TTLs for true and false verdicts.

A ``Memoizer`` wraps a predicate ``P(key) -> bool`` and remembers each verdict
for ``true_ttl`` or ``false_ttl`` seconds depending on its polarity. Concurrent
misses for the same key result in a single predicate call: the predicate runs
while the memoizer's lock is held, so it must not call back into the same
memoizer (that deadlocks).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
import functools
import threading
import time
from typing import TYPE_CHECKING, Callable, Generic, Hashable, TypeVar

from .janitor import Janitor, TimerFactory, janitor_interval

if TYPE_CHECKING:
    from .config import MemoConfig

K = TypeVar("K", bound=Hashable)

Duration = float | int | timedelta


def _seconds(ttl: Duration) -> float:
    if isinstance(ttl, timedelta):
        ttl = ttl.total_seconds()
    return max(0.0, float(ttl))


@dataclass(frozen=True)
class Entry:
    value: bool
    expires_at: float

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


class Memoizer(Generic[K]):
    def __init__(
        self,
        predicate: Callable[[K], bool],
        true_ttl: Duration,
        false_ttl: Duration,
        *,
        now: Callable[[], float] | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        self._predicate = predicate
        self._true_ttl = _seconds(true_ttl)
        self._false_ttl = _seconds(false_ttl)
        self._now = now if now is not None else time.monotonic
        self._lock = threading.Lock()
        self._entries: dict[K, Entry] = {}
        self._janitor = Janitor(
            janitor_interval(self._true_ttl, self._false_ttl),
            self._purge_expired,
            self._lock,
            timer_factory=timer_factory,
        )
        self._janitor.start()

    @classmethod
    def from_config(cls, predicate: Callable[[K], bool], config: "MemoConfig", **kwargs) -> "Memoizer[K]":
        return cls(predicate, config.true_ttl_seconds, config.false_ttl_seconds, **kwargs)

    @property
    def true_ttl(self) -> float:
        return self._true_ttl

    @property
    def false_ttl(self) -> float:
        return self._false_ttl

    @property
    def janitor_interval(self) -> float:
        return self._janitor.interval

    @property
    def stopped(self) -> bool:
        return not self._janitor.running

    def get(self, key: K) -> bool:
        """Return the verdict for ``key``, calling the predicate on a miss.

        Exceptions raised by the predicate propagate and nothing is cached.
        """
        # Lock-free read: writers mutate or swap the dict only under the lock.
        entry = self._entries.get(key)
        if entry is not None and entry.is_live(self._now()):
            return entry.value
        return self._compute(key)

    __call__ = get

    def _compute(self, key: K) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.is_live(self._now()):
                return entry.value

            result = bool(self._predicate(key))
            ttl = self._true_ttl if result else self._false_ttl
            self._entries[key] = Entry(value=result, expires_at=self._now() + ttl)
            return result

    def invalidate(self, key: K) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries = {}

    def sweep(self) -> int:
        """Remove expired entries now; returns how many were dropped."""
        with self._lock:
            return self._purge_expired()

    def _purge_expired(self) -> int:
        # Caller holds self._lock.
        now = self._now()
        expired = [key for key, entry in self._entries.items() if not entry.is_live(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def stop(self) -> None:
        """Cancel the background janitor. Cached verdicts stay readable."""
        self._janitor.stop()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[call-overload]
        return entry is not None and entry.is_live(self._now())

    def __enter__(self) -> "Memoizer[K]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __repr__(self) -> str:
        state = "stopped" if self.stopped else "running"
        return (
            f"Memoizer(true_ttl={self._true_ttl}, false_ttl={self._false_ttl}, "
            f"entries={len(self._entries)}, {state})"
        )


def memoize(
    true_ttl: Duration,
    false_ttl: Duration,
    *,
    now: Callable[[], float] | None = None,
    timer_factory: TimerFactory | None = None,
) -> Callable[[Callable[[K], bool]], Memoizer[K]]:
    """Decorator form: ``@memoize(10, 5)`` turns a predicate into a Memoizer."""

    def decorator(func: Callable[[K], bool]) -> Memoizer[K]:
        memo: Memoizer[K] = Memoizer(func, true_ttl, false_ttl, now=now, timer_factory=timer_factory)
        functools.update_wrapper(memo, func, updated=())
        return memo

    return decorator
