"""
Selector — one cache instance, called with a single param.
"""

from __future__ import annotations

import logging
from typing import Any

from memosel.selector._types import MemoSpec, Slot
from memosel.selector._slots import SlotCache
from memosel.selector._detect import select, changed

logger = logging.getLogger(__name__)


class Selector[P, R]:
    """
    Memoized selector bound to one key tuple.

    Every call re-evaluates the inputs; the result function only runs when a
    field changed, so an unchanged call returns the very same result object.

    Example:
        visible = memo().use("todos", get_todos).build(filter_todos)
        visible(state) is visible(state)  # True
    """

    __slots__ = ("_spec", "_keys", "_slots")

    def __init__(self, spec: MemoSpec, keys: tuple[Any, ...] = ()) -> None:
        self._spec = spec
        self._keys = keys
        self._slots = SlotCache(spec.size, spec.equal)

    @property
    def keys(self) -> tuple[Any, ...]:
        return self._keys

    def __len__(self) -> int:
        return len(self._slots)

    def __call__(self, param: P) -> R:
        spec = self._spec
        keys = self._keys
        now = spec.scheduler.now()

        slot = self._slots.find(param)
        if slot is not None and slot.is_expired(now):
            logger.debug("slot for %r expired, clearing %d slot(s)", param, len(self._slots))
            self._slots.clear()
            slot = None

        if slot is None:
            # Nothing is inserted (or evicted) until the result exists.
            fields = select(spec.inputs, param, keys)
            slot = Slot(param, fields, self._compute(fields))
            self._slots.insert(slot)
            self._arm(slot, now)
            return slot.result

        # Slot order and contents only change once evaluation succeeded.
        fields = select(spec.inputs, param, keys)
        if changed(slot.fields, fields):
            result = self._compute(fields)
            slot.fields = fields
            slot.result = result
            self._arm(slot, now)
        self._slots.promote(slot)
        return slot.result

    def clear(self) -> None:
        """Drop every cached result of this instance."""
        self._slots.clear()

    def _compute(self, fields: dict[str, Any]) -> Any:
        result_fn = self._spec.result_fn
        if result_fn is None:
            return fields
        return result_fn(fields, *self._keys)

    def _arm(self, slot: Slot, now: float) -> None:
        ttl = self._spec.ttl
        if ttl is None:
            return
        slot.expires_at = now + ttl
        self._spec.scheduler.schedule(slot.expires_at, self._reap)

    def _reap(self) -> None:
        if self._slots:
            logger.debug("ttl reap of %d slot(s) for keys %r", len(self._slots), self._keys)
        self._slots.clear()

    def __repr__(self) -> str:
        return f"Selector(keys={self._keys!r}, cached={len(self._slots)})"


__all__ = ("Selector",)
