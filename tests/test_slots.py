"""Tests for the bounded result cache."""

from __future__ import annotations

from memosel.selector import Slot, SlotCache


def params(cache: SlotCache) -> list[object]:
    return [slot.param for slot in cache]


class TestSlotCache:
    """Ordering, eviction and lookup."""

    def test_insert_puts_newest_first(self) -> None:
        """New slots go to the front."""
        cache = SlotCache(size=0)
        for p in ("a", "b", "c"):
            cache.insert(Slot(p))
        assert params(cache) == ["c", "b", "a"]

    def test_default_size_keeps_one(self) -> None:
        """Size 1 discards the previous slot on every new param."""
        cache = SlotCache()
        cache.insert(Slot("a"))
        cache.insert(Slot("b"))
        assert params(cache) == ["b"]
        assert cache.find("a") is None

    def test_overflow_evicts_oldest(self) -> None:
        """The back slot is dropped once capacity is exceeded."""
        cache = SlotCache(size=2)
        for p in ("a", "b", "c"):
            cache.insert(Slot(p))
        assert params(cache) == ["c", "b"]

    def test_zero_size_is_unbounded(self) -> None:
        """Size 0 never evicts."""
        cache = SlotCache(size=0)
        for p in range(100):
            cache.insert(Slot(p))
        assert len(cache) == 100

    def test_promote_moves_to_front(self) -> None:
        """A promoted slot survives the next eviction."""
        cache = SlotCache(size=2)
        a = cache.insert(Slot("a"))
        cache.insert(Slot("b"))
        cache.promote(a)
        cache.insert(Slot("c"))
        assert params(cache) == ["c", "a"]

    def test_find_uses_identity_by_default(self) -> None:
        """Equal but distinct params do not match."""
        cache = SlotCache(size=0)
        key = [1, 2]
        slot = cache.insert(Slot(key))
        assert cache.find(key) is slot
        assert cache.find([1, 2]) is None

    def test_find_uses_custom_equality(self) -> None:
        """Custom equality policy decides matches."""
        cache = SlotCache(size=0, equal=lambda a, b: a == b)
        slot = cache.insert(Slot([1, 2]))
        assert cache.find([1, 2]) is slot

    def test_clear_is_idempotent(self) -> None:
        """Clearing twice is harmless."""
        cache = SlotCache(size=0)
        cache.insert(Slot("a"))
        cache.clear()
        cache.clear()
        assert len(cache) == 0
