"""
Manual time — deterministic clock and loop for tests and simulations.

    clock = ManualClock()
    loop = ManualLoop(clock)
    scheduler = ExpiryScheduler(loop=loop, clock=clock)

    clock.advance(0.05)   # time moves, nothing runs
    loop.advance(0.05)    # time moves, due callbacks run in order
"""

from __future__ import annotations

import itertools
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


# ═══════════════════════════════════════════════════════════════════════════════
# Manual Clock
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class ManualClock:
    """Clock that only moves when told to. Seconds, like time.monotonic."""

    now: float = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ═══════════════════════════════════════════════════════════════════════════════
# Manual Loop
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True)
class ManualHandle:
    """Scheduled callback. Ordered by due time, then by scheduling order."""

    due: float
    seq: int
    callback: Callable[..., Any]
    args: tuple[Any, ...]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass(slots=True)
class ManualLoop:
    """
    Event loop over a ManualClock.

    Implements the call_soon / call_later subset of asyncio. Nothing runs
    until run_ready() or advance() is called.
    """

    clock: ManualClock
    _ready: deque[ManualHandle] = field(default_factory=deque)
    _timers: list[ManualHandle] = field(default_factory=list)
    _seq: itertools.count = field(default_factory=itertools.count)
    _closed: bool = False

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> ManualHandle:
        handle = ManualHandle(self.clock.now, next(self._seq), callback, args)
        self._ready.append(handle)
        return handle

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> ManualHandle:
        handle = ManualHandle(self.clock.now + delay, next(self._seq), callback, args)
        self._timers.append(handle)
        return handle

    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Drop every pending callback; the loop runs nothing afterwards."""
        self._closed = True
        self._ready.clear()
        self._timers.clear()

    @property
    def pending(self) -> int:
        """Callbacks not yet run and not cancelled."""
        return sum(1 for h in (*self._ready, *self._timers) if not h.cancelled)

    def run_ready(self) -> None:
        """Run call_soon callbacks, including ones they schedule."""
        while self._ready:
            handle = self._ready.popleft()
            if not handle.cancelled:
                handle.callback(*handle.args)

    def advance(self, seconds: float) -> None:
        """Move time forward, firing every timer that falls due on the way."""
        target = self.clock.now + seconds
        self.run_ready()
        while (handle := self._next_due(target)) is not None:
            self._timers.remove(handle)
            self.clock.now = max(self.clock.now, handle.due)
            handle.callback(*handle.args)
            self.run_ready()
        self.clock.now = target

    def _next_due(self, target: float) -> ManualHandle | None:
        due = [h for h in self._timers if not h.cancelled and h.due <= target]
        if not due:
            return None
        return min(due, key=lambda h: (h.due, h.seq))


__all__ = (
    "ManualClock",
    "ManualHandle",
    "ManualLoop",
)
