"""
Expiry — TTL reaping with a single timer.

    from memosel import expiry as X

    scheduler = X.ExpiryScheduler()
    scheduler.schedule(scheduler.now() + 0.05, cache.clear)
"""

from __future__ import annotations

from memosel.expiry._types import (
    Clock,
    Reaper,
    TimerHandle,
    EventLoop,
    ExpiryEntry,
)
from memosel.expiry._scheduler import (
    ExpiryScheduler,
    get_default_scheduler,
    set_default_scheduler,
)
from memosel.expiry._manual import ManualClock, ManualHandle, ManualLoop

__all__ = (
    "Clock",
    "Reaper",
    "TimerHandle",
    "EventLoop",
    "ExpiryEntry",
    "ExpiryScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
    "ManualClock",
    "ManualHandle",
    "ManualLoop",
)
