"""Tests for builder configuration and validation."""

from __future__ import annotations

from datetime import timedelta

import pytest
from kungfu import Error, Ok

from memosel import ConfigError, ConfigErrorKind, memo
from memosel.selector import Field, Group, MemoSpec, strict_equal


class TestBuilderImmutability:
    def test_methods_return_new_builders(self) -> None:
        base = memo().use("a", lambda p: p)
        extended = base.use("b", lambda p: p)
        assert base is not extended
        assert [i.name for i in base._inputs if isinstance(i, Field)] == ["a"]

    def test_replacing_name_keeps_position(self) -> None:
        fn = lambda p: p  # noqa: E731
        builder = memo().use("a", fn).use("b", fn).use("a", str)
        assert [i.name for i in builder._inputs] == ["a", "b"]
        assert builder._inputs[0].fn is str

    def test_group_is_tagged(self) -> None:
        builder = memo().use_group(lambda p: {})
        assert isinstance(builder._inputs[0], Group)


class TestTTLUnits:
    @pytest.mark.parametrize(
        ("builder", "expected"),
        [
            (memo().ttl(250), 0.25),
            (memo().ttl(seconds=2), 2),
            (memo().ttl(delta=timedelta(minutes=1)), 60),
        ],
    )
    def test_ttl_is_resolved_in_seconds(self, builder, expected) -> None:
        match builder.check():
            case Ok(spec):
                assert spec.ttl == pytest.approx(expected)
            case Error(e):
                pytest.fail(f"unexpected error: {e}")

    def test_ttl_without_arguments_disables_expiry(self) -> None:
        match memo().ttl(50).ttl().check():
            case Ok(spec):
                assert spec.ttl is None
            case Error(e):
                pytest.fail(f"unexpected error: {e}")

    @pytest.mark.parametrize(
        "builder",
        [
            memo().ttl("50"),
            memo().ttl(float("nan")),
            memo().ttl(seconds=float("inf")),
            memo().ttl(delta="1m"),
            memo().ttl(True),
        ],
    )
    def test_malformed_ttl_fails_at_build(self, builder) -> None:
        with pytest.raises(ConfigError) as exc_info:
            builder.build()
        assert exc_info.value.kind is ConfigErrorKind.TTL


class TestCheck:
    """Errors as values from check(), raised from build()."""

    def test_valid_configuration(self) -> None:
        match memo().use("a", lambda p: p).size(3).check():
            case Ok(spec):
                assert isinstance(spec, MemoSpec)
                assert spec.size == 3
                assert spec.ttl is None
                assert spec.equal is strict_equal
            case Error(e):
                pytest.fail(f"unexpected error: {e}")

    @pytest.mark.parametrize("size", [-1, 1.5, "3", True])
    def test_bad_size(self, size) -> None:
        with pytest.raises(ConfigError) as exc_info:
            memo().size(size).build()
        assert exc_info.value.kind is ConfigErrorKind.CAPACITY

    def test_negative_ttl(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            memo().ttl(-5).build()
        assert exc_info.value.kind is ConfigErrorKind.TTL

    def test_non_callable_input(self) -> None:
        with pytest.raises(ConfigError, match="input 'a' must be callable"):
            memo().use("a", 42).build()

    def test_non_callable_group(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            memo().use_group({"a": 1}).build()
        assert exc_info.value.kind is ConfigErrorKind.NOT_CALLABLE

    def test_bad_field_name(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            memo().use("", lambda p: p).build()
        assert exc_info.value.kind is ConfigErrorKind.FIELD_NAME

    @pytest.mark.parametrize(
        "builder",
        [
            memo().family("not a function"),
            memo().compare(None),
        ],
    )
    def test_non_callable_hooks(self, builder) -> None:
        with pytest.raises(ConfigError) as exc_info:
            builder.build()
        assert exc_info.value.kind is ConfigErrorKind.NOT_CALLABLE

    def test_non_callable_result_fn(self) -> None:
        with pytest.raises(ConfigError, match="result function"):
            memo().use("a", lambda p: p).build("nope")

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            memo().size(-1).build()
