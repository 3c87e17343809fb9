"""
Expiry types.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Callable
from typing import Any, Protocol

# ═══════════════════════════════════════════════════════════════════════════════
# Clock & Reaper
# ═══════════════════════════════════════════════════════════════════════════════

type Clock = Callable[[], float]
"""Monotonic time source in seconds."""

type Reaper = Callable[[], None]
"""Callback invoked once its entry is due."""


# ═══════════════════════════════════════════════════════════════════════════════
# Event Loop Protocol — asyncio subset
# ═══════════════════════════════════════════════════════════════════════════════


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class EventLoop(Protocol):
    """
    The part of an event loop the scheduler needs.

    asyncio loops satisfy it as-is; ManualLoop implements it over virtual
    time for tests.
    """

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        """Run callback on the next loop iteration."""
        ...

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        """Run callback after delay seconds."""
        ...

    def is_closed(self) -> bool:
        """True once the loop can no longer run callbacks."""
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Expiry Entry
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True, eq=False)
class ExpiryEntry:
    """Pending reap. No identity beyond its place in the queue."""

    expires_at: float
    reap: Reaper


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "Clock",
    "Reaper",
    "TimerHandle",
    "EventLoop",
    "ExpiryEntry",
)
