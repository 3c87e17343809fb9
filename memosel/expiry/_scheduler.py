"""
Expiry scheduler — one timer, soonest entry first.
"""

from __future__ import annotations

import asyncio
import bisect
import logging
import time
from operator import attrgetter

from memosel.expiry._types import (
    Clock,
    EventLoop,
    ExpiryEntry,
    Reaper,
    TimerHandle,
)

logger = logging.getLogger(__name__)

_by_expiry = attrgetter("expires_at")


# ═══════════════════════════════════════════════════════════════════════════════
# Scheduler
# ═══════════════════════════════════════════════════════════════════════════════


class ExpiryScheduler:
    """
    Reaps expired caches with a single timer.

    Registrations are buffered and flushed on the next loop iteration, so a
    burst of same-tick schedules costs one sort. The flushed queue is drained
    one entry at a time: pop the soonest, arm a timer, reap, repeat.

    Example:
        scheduler = ExpiryScheduler()                       # running asyncio loop
        scheduler = ExpiryScheduler(loop=ManualLoop(clock), clock=clock)

    Note: Without an injected loop the running asyncio loop is used. Outside
    of a running loop nothing can be timed, so the entry is dropped; selectors
    still treat expired slots as misses on access.
    """

    __slots__ = (
        "_loop",
        "_clock",
        "_queue",
        "_incoming",
        "_owner",
        "_flush",
        "_armed",
        "_timer",
    )

    def __init__(self, loop: EventLoop | None = None, clock: Clock = time.monotonic) -> None:
        self._loop = loop
        self._clock = clock
        self._queue: list[ExpiryEntry] = []
        self._incoming: list[ExpiryEntry] = []
        # Loop holding the pending flush and the armed timer.
        self._owner: EventLoop | None = None
        self._flush: TimerHandle | None = None
        self._armed: ExpiryEntry | None = None
        self._timer: TimerHandle | None = None

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def queued(self) -> int:
        """Entries visible to the dispatcher, including the armed one."""
        return len(self._queue) + (self._armed is not None)

    def now(self) -> float:
        return self._clock()

    def schedule(self, expires_at: float, reap: Reaper) -> None:
        """Register reap to run once expires_at is reached."""
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("no running event loop, expiry at %.3f left to lazy checks", expires_at)
            return
        self._adopt(loop)
        self._incoming.append(ExpiryEntry(expires_at, reap))
        if self._flush is None:
            self._owner = loop
            self._flush = loop.call_soon(self._drain_incoming)

    def _resolve_loop(self) -> EventLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _adopt(self, loop: EventLoop) -> None:
        """
        Move pending work onto loop.

        Handles on a closed or replaced loop never fire (e.g. after
        asyncio.run returns); their entries go back in the queue.
        """
        owner = self._owner
        if owner is None or (owner is loop and not owner.is_closed()):
            return
        logger.debug("event loop changed, re-queueing %d pending expiry entries", self.queued)
        if not owner.is_closed():
            for handle in (self._flush, self._timer):
                if handle is not None:
                    handle.cancel()
        if self._armed is not None:
            bisect.insort(self._queue, self._armed, key=_by_expiry)
        self._owner = self._flush = self._armed = self._timer = None

    def _drain_incoming(self) -> None:
        self._flush = None
        self._queue.extend(self._incoming)
        self._incoming.clear()
        self._queue.sort(key=_by_expiry)

        armed = self._armed
        if armed is not None and self._queue and self._queue[0].expires_at < armed.expires_at:
            # A sooner entry arrived; put the armed one back in line.
            if self._timer is not None:
                self._timer.cancel()
            self._armed = self._timer = None
            bisect.insort(self._queue, armed, key=_by_expiry)
        self._dispatch()

    def _dispatch(self) -> None:
        if self._armed is not None or not self._queue:
            return
        loop = self._resolve_loop()
        if loop is None:
            return
        entry = self._queue.pop(0)
        delay = max(0.0, entry.expires_at - self._clock())
        self._owner = loop
        self._armed = entry
        self._timer = loop.call_later(delay, self._fire)
        logger.debug("armed expiry timer for %.3fs, %d more queued", delay, len(self._queue))

    def _fire(self) -> None:
        entry = self._armed
        self._armed = self._timer = None
        try:
            if entry is not None:
                entry.reap()
        finally:
            self._dispatch()


# ═══════════════════════════════════════════════════════════════════════════════
# Default Scheduler
# ═══════════════════════════════════════════════════════════════════════════════

_default_scheduler: ExpiryScheduler | None = None


def get_default_scheduler() -> ExpiryScheduler:
    """
    Get the process-wide scheduler, creating it on first use.

    Builders without an explicit .scheduler(...) share it.
    """
    global _default_scheduler
    if _default_scheduler is None:
        _default_scheduler = ExpiryScheduler()
    return _default_scheduler


def set_default_scheduler(scheduler: ExpiryScheduler | None) -> None:
    """
    Replace the process-wide scheduler.

    Passing None resets it; the next get_default_scheduler() creates a
    fresh one. Selectors already built keep the scheduler they were built
    with.
    """
    global _default_scheduler
    _default_scheduler = scheduler


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "ExpiryScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
)
