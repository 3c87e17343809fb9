"""
Bounded result cache — most recent slot first.
"""

from __future__ import annotations

import logging
from typing import Any

from memosel.selector._types import EqualFn, Slot, strict_equal

logger = logging.getLogger(__name__)


class SlotCache:
    """
    Ordered result slots of one selector instance.

    Lookup is a linear scan with the equality policy; the active slot always
    sits at the front and overflow drops the back.

    Example:
        slots = SlotCache(size=3)
        slot = slots.find(param) or slots.insert(Slot(param))

    Note: size=0 disables eviction.
    """

    __slots__ = ("_size", "_equal", "_slots")

    def __init__(self, size: int = 1, equal: EqualFn = strict_equal) -> None:
        self._size = size
        self._equal = equal
        self._slots: list[Slot] = []

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def find(self, param: Any) -> Slot | None:
        for slot in self._slots:
            if self._equal(slot.param, param):
                return slot
        return None

    def promote(self, slot: Slot) -> None:
        if self._slots and self._slots[0] is slot:
            return
        self._slots.remove(slot)
        self._slots.insert(0, slot)

    def insert(self, slot: Slot) -> Slot:
        self._slots.insert(0, slot)
        if self._size and len(self._slots) > self._size:
            evicted = self._slots.pop()
            logger.debug("evicted slot for %r (size=%d)", evicted.param, self._size)
        return slot

    def clear(self) -> None:
        """Drop every slot. Safe on an empty cache."""
        self._slots.clear()


__all__ = ("SlotCache",)
