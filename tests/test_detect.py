"""Tests for field evaluation and change detection."""

from __future__ import annotations

from memosel.selector import Field, Group, changed, select


class TestSelect:
    def test_fields_receive_param_and_keys(self) -> None:
        inputs = (Field("sum", lambda p, a, b: p + a + b),)
        assert select(inputs, 1, (2, 3)) == {"sum": 6}

    def test_group_contributes_every_entry(self) -> None:
        inputs = (
            Field("a", lambda p: p),
            Group(lambda p: {"b": p * 2, "c": p * 3}),
        )
        assert select(inputs, 2, ()) == {"a": 2, "b": 4, "c": 6}

    def test_later_input_wins(self) -> None:
        inputs = (Field("a", lambda p: 1), Group(lambda p: {"a": 2}))
        assert select(inputs, None, ()) == {"a": 2}


class TestChanged:
    def test_no_previous_fields(self) -> None:
        assert changed(None, {}) is True

    def test_same_objects(self) -> None:
        todos = [1, 2]
        assert changed({"todos": todos}, {"todos": todos}) is False

    def test_equal_but_distinct_objects(self) -> None:
        """Identity, not equality."""
        assert changed({"todos": [1, 2]}, {"todos": [1, 2]}) is True

    def test_one_field_of_many(self) -> None:
        shared = object()
        assert changed({"a": shared, "b": object()}, {"a": shared, "b": object()}) is True

    def test_field_set_changed(self) -> None:
        shared = object()
        assert changed({"a": shared}, {"a": shared, "b": shared}) is True
        assert changed({"a": shared, "b": shared}, {"a": shared}) is True
