from __future__ import annotations

import heapq
import itertools
import time
from typing import Callable, Protocol

Callback = Callable[[float], None]


class Clock(Protocol):
    def now(self) -> float: ...


class SystemClock:
    """Wall-clock time in epoch seconds."""

    def now(self) -> float:
        return time.time()


class VirtualClock:
    """A clock that only moves when told to; used by simulations and tests."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now

    def set(self, when: float) -> None:
        self._now = when


class TaskHandle:
    """Handle to a scheduled callback."""

    def __init__(self, when: float, fn: Callback, interval: float | None = None) -> None:
        self.when = when
        self.fn = fn
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def periodic(self) -> bool:
        return self.interval is not None


class TaskScheduler:
    """Runs callbacks at absolute times on an externally driven clock.

    Nothing runs on its own: the owner calls :meth:`run_due` with the
    current time, typically once per tick. Callbacks receive that time.
    Periodic tasks are re-armed relative to the time they ran, so a long
    gap fires them once rather than replaying every missed period.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, TaskHandle]] = []
        self._seq = itertools.count()

    def _push(self, handle: TaskHandle) -> TaskHandle:
        heapq.heappush(self._heap, (handle.when, next(self._seq), handle))
        return handle

    def call_at(self, when: float, fn: Callback) -> TaskHandle:
        return self._push(TaskHandle(when, fn))

    def call_later(self, delay: float, fn: Callback, now: float) -> TaskHandle:
        return self.call_at(now + delay, fn)

    def call_every(self, interval: float, fn: Callback, start: float) -> TaskHandle:
        """Run *fn* every *interval* seconds, first at ``start + interval``."""
        if interval <= 0:
            raise ValueError("interval must be positive")
        return self._push(TaskHandle(start + interval, fn, interval))

    def reset(self, handle: TaskHandle, now: float) -> None:
        """Restart a periodic task's countdown from *now*."""
        if handle.interval is None or handle.cancelled:
            return
        self._purge(handle)
        handle.when = now + handle.interval
        self._push(handle)

    def _purge(self, handle: TaskHandle) -> None:
        self._heap = [entry for entry in self._heap if entry[2] is not handle]
        heapq.heapify(self._heap)

    def run_due(self, now: float) -> int:
        """Run every task due at or before *now*, in due-time order.

        Tasks scheduled by a callback during this call run no earlier than
        the next call. Returns the number of callbacks run.
        """
        due: list[TaskHandle] = []
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.cancelled:
                due.append(handle)

        ran = 0
        for handle in due:
            if handle.cancelled:
                continue
            if handle.interval is not None:
                handle.when = now + handle.interval
                self._push(handle)
            handle.fn(now)
            ran += 1
        return ran

    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def next_due(self) -> float | None:
        for when, _, handle in sorted(self._heap, key=lambda e: (e[0], e[1])):
            if not handle.cancelled:
                return when
        return None

    def cancel_all(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
