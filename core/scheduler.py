"""Host-driven timers and per-frame update coalescing.

The window core never sleeps or spawns threads. Timed phase completions are
registered with a scheduler exposing ``call_later(delay, callback, *args)``
that returns a handle with ``cancel()``; ``asyncio`` event loops satisfy that
protocol directly, and :class:`ManualScheduler` provides a deterministic clock
for tests and scripted replays.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from collections import OrderedDict
from collections.abc import Callable, Hashable
from typing import Any, Protocol

logger = logging.getLogger("dwm.scheduler")


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Cancellable: ...


class TimerHandle:
    """Pending callback registered with :class:`ManualScheduler`."""

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple[Any, ...]) -> None:
        self.when = when
        self._callback = callback
        self._args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def _run(self) -> None:
        self._callback(*self._args)


class ManualScheduler:
    """Deterministic clock advanced explicitly by the host."""

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        handle = TimerHandle(self.now + max(0.0, delay), callback, args)
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing due timers in due-time then FIFO order.

        Returns the number of callbacks that ran.
        """
        deadline = self.now + max(0.0, seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = when
            handle._run()
            fired += 1
        self.now = deadline
        return fired


class FrameCoalescer:
    """Keeps only the latest value per key until the next frame.

    Keys are flushed in the order they were first submitted within a frame,
    so coalescing drops intermediate values but never reorders or loses the
    last one.
    """

    def __init__(self, sink: Callable[[Hashable, Any], None]) -> None:
        self._sink = sink
        self._pending: OrderedDict[Hashable, Any] = OrderedDict()

    def submit(self, key: Hashable, value: Any) -> None:
        self._pending[key] = value

    def has_pending(self, key: Hashable | None = None) -> bool:
        if key is None:
            return bool(self._pending)
        return key in self._pending

    def discard(self, key: Hashable) -> None:
        if self._pending.pop(key, None) is not None:
            logger.debug("Discarded pending frame update for %s", key)

    def flush(self) -> int:
        """Deliver pending values; returns how many were delivered."""
        items = list(self._pending.items())
        self._pending.clear()
        for key, value in items:
            self._sink(key, value)
        return len(items)
