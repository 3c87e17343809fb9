"""
Selector types.
"""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Callable, Mapping
from enum import Enum, auto
from typing import Any

from memosel.expiry import ExpiryScheduler

# ═══════════════════════════════════════════════════════════════════════════════
# Function Types
# ═══════════════════════════════════════════════════════════════════════════════

type InputFn = Callable[..., Any]
"""(param, *keys) -> field value."""

type GroupFn = Callable[..., Mapping[str, Any]]
"""(param, *keys) -> several field values at once."""

type KeyFn = Callable[..., tuple[Any, ...]]
"""(*args) -> key tuple."""

type ResultFn = Callable[..., Any]
"""(fields, *keys) -> result."""

type EqualFn = Callable[[Any, Any], bool]
"""(cached param, new param) -> same?"""


def strict_equal(a: Any, b: Any) -> bool:
    """Default equality policy: identity."""
    return a is b


def same_keys(*args: Any) -> tuple[Any, ...]:
    """Default family key: the call arguments themselves."""
    return args


# ═══════════════════════════════════════════════════════════════════════════════
# Inputs — Tagged Variants
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Field:
    """One named input: fields[name] = fn(param, *keys)."""

    name: str
    fn: InputFn


@dataclass(frozen=True, slots=True)
class Group:
    """Input producing several fields: fields.update(fn(param, *keys))."""

    fn: GroupFn


type Input = Field | Group


# ═══════════════════════════════════════════════════════════════════════════════
# Result Slot
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(slots=True, eq=False)
class Slot:
    """
    One cached computation.

    Note: expires_at is None while no TTL is armed.
    """

    param: Any
    fields: dict[str, Any] | None = None
    result: Any = None
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at <= now


# ═══════════════════════════════════════════════════════════════════════════════
# Frozen Configuration
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class MemoSpec:
    """
    Validated selector configuration shared by every instance of a build.

    size: 0 means unbounded.
    ttl: seconds, None when results never expire.
    """

    inputs: tuple[Input, ...]
    result_fn: ResultFn | None
    size: int
    ttl: float | None
    equal: EqualFn
    scheduler: ExpiryScheduler


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


class ConfigErrorKind(Enum):
    """Configuration error kinds."""

    CAPACITY = auto()
    TTL = auto()
    NOT_CALLABLE = auto()
    FIELD_NAME = auto()


@dataclass(eq=False)
class ConfigError(ValueError):
    """Raised by build() for a malformed configuration."""

    kind: ConfigErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "InputFn",
    "GroupFn",
    "KeyFn",
    "ResultFn",
    "EqualFn",
    "strict_equal",
    "same_keys",
    "Field",
    "Group",
    "Input",
    "Slot",
    "MemoSpec",
    "ConfigErrorKind",
    "ConfigError",
)
