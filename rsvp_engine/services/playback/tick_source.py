"""
Tick sources that drive the playback loop.

A tick source calls its subscribers with a timestamp in milliseconds at
roughly display-refresh rate. The controller never assumes a fixed interval,
so any monotonic driver works:

- ManualTickSource: a synthetic clock for tests and simulations
- AsyncioTickSource: a real-time driver on an asyncio event loop
"""

import asyncio
import itertools
import logging
import time
from typing import Callable, Dict, Iterable, Optional, Protocol

from rsvp_engine.services.tokenizer.constants import DEFAULT_TICK_INTERVAL_MS

logger = logging.getLogger(__name__)

TickCallback = Callable[[float], None]
Unsubscribe = Callable[[], None]


class TickSource(Protocol):
    """Anything that can push millisecond timestamps to subscribers."""

    def subscribe(self, callback: TickCallback) -> Unsubscribe:
        ...


class _SubscriberRegistry:
    """Keyed subscriber storage shared by the tick sources.

    Dispatch works on a snapshot, so a callback that subscribes during a
    tick is first called on the next tick. A callback removed during a
    tick is not called for the rest of that tick.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[int, TickCallback] = {}
        self._keys = itertools.count()

    def __len__(self) -> int:
        return len(self._callbacks)

    def add(self, callback: TickCallback) -> int:
        key = next(self._keys)
        self._callbacks[key] = callback
        return key

    def remove(self, key: int) -> bool:
        return self._callbacks.pop(key, None) is not None

    def clear(self) -> None:
        self._callbacks.clear()

    def dispatch(self, timestamp_ms: float) -> None:
        for key, callback in list(self._callbacks.items()):
            if key in self._callbacks:
                callback(timestamp_ms)


class ManualTickSource:
    """
    Synthetic tick source driven explicitly by the caller.

    Example usage:
        >>> source = ManualTickSource()
        >>> seen = []
        >>> unsubscribe = source.subscribe(seen.append)
        >>> source.run([16, 16, 120])
        >>> seen
        [16.0, 32.0, 152.0]
        >>> unsubscribe()
        >>> source.subscriber_count
        0
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now_ms = float(start_ms)
        self._subscribers = _SubscriberRegistry()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: TickCallback) -> Unsubscribe:
        key = self._subscribers.add(callback)

        def unsubscribe() -> None:
            self._subscribers.remove(key)

        return unsubscribe

    def tick(self, timestamp_ms: Optional[float] = None) -> None:
        """Deliver one tick at timestamp_ms (defaults to the current time)."""
        if timestamp_ms is not None:
            self._now_ms = float(timestamp_ms)
        self._subscribers.dispatch(self._now_ms)

    def advance(self, delta_ms: float) -> None:
        """Move the clock forward by delta_ms and deliver one tick."""
        self.tick(self._now_ms + delta_ms)

    def run(self, deltas: Iterable[float]) -> None:
        """Deliver one tick per delta."""
        for delta_ms in deltas:
            self.advance(delta_ms)


class AsyncioTickSource:
    """
    Real-time tick source backed by an asyncio event loop.

    The source only schedules itself while it has subscribers; when the last
    subscriber leaves, the pending timer handle is cancelled synchronously.

    Args:
        interval_ms: Target delay between ticks.
        clock: Monotonic clock returning seconds.
        loop: Event loop to schedule on; defaults to the running loop at
            the time of the first subscription.
    """

    def __init__(
        self,
        interval_ms: float = DEFAULT_TICK_INTERVAL_MS,
        clock: Callable[[], float] = time.monotonic,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        self.interval_ms = interval_ms
        self._clock = clock
        self._loop = loop
        self._subscribers = _SubscriberRegistry()
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def now_ms(self) -> float:
        return self._clock() * 1000.0

    def subscribe(self, callback: TickCallback) -> Unsubscribe:
        """
        Register callback and start ticking if idle.

        Raises:
            RuntimeError: No loop was given and none is running. Nothing is
                registered in that case.
        """
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        key = self._subscribers.add(callback)
        try:
            self._schedule()
        except RuntimeError:
            self._subscribers.remove(key)
            raise

        def unsubscribe() -> None:
            if self._subscribers.remove(key) and not self._subscribers:
                self._cancel()

        return unsubscribe

    def close(self) -> None:
        """Drop all subscribers and cancel the pending tick."""
        self._subscribers.clear()
        self._cancel()

    def _schedule(self) -> None:
        if self._handle is not None or not self._subscribers:
            return
        self._handle = self._loop.call_later(self.interval_ms / 1000.0, self._fire)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        try:
            self._subscribers.dispatch(self.now_ms())
        finally:
            self._schedule()
