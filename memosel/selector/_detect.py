"""
Change detection — evaluate inputs, diff by identity.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from memosel.selector._types import Field, Group, Input


def select(inputs: tuple[Input, ...], param: Any, keys: tuple[Any, ...]) -> dict[str, Any]:
    """
    Evaluate every input against (param, *keys).

    Later inputs win when a group and a field produce the same name.
    """
    fields: dict[str, Any] = {}
    for source in inputs:
        match source:
            case Field(name, fn):
                fields[name] = fn(param, *keys)
            case Group(fn):
                fields.update(fn(param, *keys))
    return fields


def changed(previous: Mapping[str, Any] | None, current: Mapping[str, Any]) -> bool:
    """
    True if any field differs by identity, or the field set differs.

    Note: Identity, not equality. Inputs that rebuild equal values on every
    call defeat memoization; return stable references instead.
    """
    if previous is None or previous.keys() != current.keys():
        return True
    return any(value is not previous[name] for name, value in current.items())


__all__ = ("select", "changed")
