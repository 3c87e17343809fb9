"""
Selector builder — fluent API.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import timedelta
from collections.abc import Mapping
from typing import Any

from kungfu import Result, Ok, Error

from memosel.expiry import ExpiryScheduler, get_default_scheduler
from memosel.selector._types import (
    InputFn,
    GroupFn,
    KeyFn,
    ResultFn,
    EqualFn,
    Field,
    Group,
    Input,
    MemoSpec,
    ConfigError,
    ConfigErrorKind,
    strict_equal,
    same_keys,
)
from memosel.selector._instance import Selector
from memosel.selector._tree import KeyTree, FamilySelector

# ═══════════════════════════════════════════════════════════════════════════════
# Memo Builder
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, frozen=True)
class Memo:
    """
    Fluent selector builder.

    Immutable — each method returns a new Memo, so a partially configured
    builder can be shared and extended.

    Example:
        get_visible_todos = (
            memo()
            .family(lambda props: (props.list_id,))
            .use("filter", get_filter)
            .use("todos", get_todos)
            .build(lambda f, list_id: filter_todos(f["filter"], f["todos"]))
        )

        get_visible_todos(props)(state)
    """

    _inputs: tuple[Input, ...] = ()
    _key_fn: KeyFn | None = None
    _size: int = 1
    # (amount, seconds per unit), checked by _validate
    _ttl: tuple[Any, float] | None = None
    _equal: EqualFn = strict_equal
    _scheduler: ExpiryScheduler | None = None

    def use(self, name: str, fn: InputFn) -> Memo:
        """
        Add named input: fields[name] = fn(param, *keys).

        Re-using a name replaces the earlier input in place.
        """
        return replace(self, _inputs=_put(self._inputs, Field(name, fn)))

    def use_many(self, fns: Mapping[str, InputFn]) -> Memo:
        """Add several named inputs at once."""
        inputs = self._inputs
        for name, fn in fns.items():
            inputs = _put(inputs, Field(name, fn))
        return replace(self, _inputs=inputs)

    def use_group(self, fn: GroupFn) -> Memo:
        """
        Add input returning a mapping of fields.

        Example:
            .use_group(lambda state: {"user": state.user, "cart": state.cart})
        """
        return replace(self, _inputs=(*self._inputs, Group(fn)))

    def family(self, key_fn: KeyFn | None = None) -> Memo:
        """
        Make the selector keyed.

        Without key_fn the family is keyed by its call arguments.

        Example:
            .family()                              # by_id(42)(state)
            .family(lambda props: (props.list_id,))
        """
        return replace(self, _key_fn=key_fn if key_fn is not None else same_keys)

    def size(self, value: int) -> Memo:
        """Results kept per instance. Default 1, 0 = unbounded."""
        return replace(self, _size=value)

    def ttl(
        self,
        ms: float | None = None,
        *,
        seconds: float | None = None,
        delta: timedelta | None = None,
    ) -> Memo:
        """
        Expire cached results.

        Once any result of an instance expires the whole instance is cleared.

        Example:
            .ttl(50)                 # 50 milliseconds
            .ttl(seconds=30)
            .ttl(delta=timedelta(minutes=5))
        """
        if delta is not None:
            value = (delta.total_seconds() if isinstance(delta, timedelta) else delta), 1.0
        elif seconds is not None:
            value = seconds, 1.0
        elif ms is not None:
            value = ms, 0.001
        else:
            value = None
        return replace(self, _ttl=value)

    def compare(self, fn: EqualFn) -> Memo:
        """Set equality policy for params. Default: identity."""
        return replace(self, _equal=fn)

    def scheduler(self, s: ExpiryScheduler) -> Memo:
        """Set expiry scheduler (and its clock). Default: process-wide one."""
        return replace(self, _scheduler=s)

    def check(self, result_fn: ResultFn | None = None) -> Result[MemoSpec, ConfigError]:
        """Validate configuration without building."""
        return _validate(self, result_fn)

    def build(
        self, result_fn: ResultFn | None = None
    ) -> Selector[Any, Any] | FamilySelector[Any, Any]:
        """
        Build memoized selector.

        Without result_fn the selector returns the fields dict itself.

        Raises:
            ConfigError: configuration is malformed.
        """
        match _validate(self, result_fn):
            case Error(e):
                raise e
            case Ok(spec):
                if self._key_fn is None:
                    return Selector(spec)
                return FamilySelector(self._key_fn, KeyTree(lambda keys: Selector(spec, keys)))


# ═══════════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════════


def _put(inputs: tuple[Input, ...], item: Field) -> tuple[Input, ...]:
    for i, existing in enumerate(inputs):
        if isinstance(existing, Field) and existing.name == item.name:
            return (*inputs[:i], item, *inputs[i + 1 :])
    return (*inputs, item)


def _not_callable(what: str, value: object) -> Result[MemoSpec, ConfigError]:
    return Error(
        ConfigError(ConfigErrorKind.NOT_CALLABLE, f"{what} must be callable, got {value!r}")
    )


def _validate(m: Memo, result_fn: ResultFn | None) -> Result[MemoSpec, ConfigError]:
    size = m._size
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        return Error(
            ConfigError(
                ConfigErrorKind.CAPACITY,
                f"size must be a non-negative integer, got {size!r}",
            )
        )

    ttl: float | None = None
    if m._ttl is not None:
        amount, unit = m._ttl
        if (
            isinstance(amount, bool)
            or not isinstance(amount, (int, float))
            or not math.isfinite(amount)
            or amount < 0
        ):
            return Error(
                ConfigError(
                    ConfigErrorKind.TTL,
                    f"ttl must be a finite non-negative number, got {amount!r}",
                )
            )
        ttl = amount * unit

    for source in m._inputs:
        match source:
            case Field(name, fn):
                if not isinstance(name, str) or not name:
                    return Error(
                        ConfigError(
                            ConfigErrorKind.FIELD_NAME,
                            f"field name must be a non-empty string, got {name!r}",
                        )
                    )
                if not callable(fn):
                    return _not_callable(f"input {name!r}", fn)
            case Group(fn):
                if not callable(fn):
                    return _not_callable("group input", fn)

    if m._key_fn is not None and not callable(m._key_fn):
        return _not_callable("key function", m._key_fn)
    if result_fn is not None and not callable(result_fn):
        return _not_callable("result function", result_fn)
    if not callable(m._equal):
        return _not_callable("equality function", m._equal)

    return Ok(
        MemoSpec(
            inputs=m._inputs,
            result_fn=result_fn,
            size=size,
            # 0 disables expiry
            ttl=ttl or None,
            equal=m._equal,
            scheduler=m._scheduler if m._scheduler is not None else get_default_scheduler(),
        )
    )


# ═══════════════════════════════════════════════════════════════════════════════
# memo() — Entry Point
# ═══════════════════════════════════════════════════════════════════════════════


def memo() -> Memo:
    """
    Create selector builder.

    Example:
        from memosel import memo

        double = memo().use("value", lambda x: x).build(
            lambda f: {"result": f["value"] * 2}
        )

        double(1) is double(1)  # True
    """
    return Memo()


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = ("Memo", "memo")
