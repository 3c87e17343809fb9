"""
Key tree — key tuple → selector instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any

from memosel.selector._types import KeyFn
from memosel.selector._instance import Selector

logger = logging.getLogger(__name__)

# Compared by value; everything else by identity.
_SCALARS = (type(None), bool, int, float, complex, str, bytes)


def key_token(key: Any) -> Hashable:
    """Lookup token for one key element."""
    if isinstance(key, _SCALARS):
        return (type(key), key)
    return id(key)


@dataclass(slots=True)
class _Node:
    # Holding the key keeps its id() from being reused while the branch lives.
    key: Any = None
    children: dict[Hashable, _Node] = field(default_factory=dict)
    selector: Selector[Any, Any] | None = None


class KeyTree:
    """
    One level per key element, selector at the leaf.

    Nodes are created on first visit and only discarded all at once by
    clear(). The number of branches grows with the distinct keys seen.
    """

    __slots__ = ("_factory", "_default", "_root", "_arity")

    def __init__(self, factory: Callable[[tuple[Any, ...]], Selector[Any, Any]]) -> None:
        self._factory = factory
        self._default = factory(())
        self._root = _Node()
        self._arity: int | None = None

    @property
    def default(self) -> Selector[Any, Any]:
        return self._default

    def resolve(self, keys: tuple[Any, ...]) -> Selector[Any, Any]:
        if not keys:
            return self._default
        if self._arity is None:
            self._arity = len(keys)
        elif len(keys) != self._arity:
            raise ValueError(
                f"Key tuple length changed: expected {self._arity}, got {len(keys)}"
            )

        node = self._root
        for key in keys:
            token = key_token(key)
            child = node.children.get(token)
            if child is None:
                child = node.children[token] = _Node(key)
            node = child

        if node.selector is None:
            node.selector = self._factory(keys)
        return node.selector

    def clear(self) -> None:
        logger.debug("clearing key tree (arity=%s)", self._arity)
        self._root.children.clear()
        self._arity = None
        self._default.clear()

    def __len__(self) -> int:
        return sum(1 for _ in self._leaves(self._root))

    def _leaves(self, node: _Node) -> Iterator[Selector[Any, Any]]:
        if node.selector is not None:
            yield node.selector
        for child in node.children.values():
            yield from self._leaves(child)


class FamilySelector[P, R]:
    """
    Keyed selector family.

    Calling the family with key arguments returns the selector instance for
    that key; instances never share or evict each other's results.

    Example:
        visible = memo().family(lambda props: (props.list_id,)).use(...).build(fn)
        visible(props)(state)
    """

    __slots__ = ("_key_fn", "_tree")

    def __init__(self, key_fn: KeyFn, tree: KeyTree) -> None:
        self._key_fn = key_fn
        self._tree = tree

    def __call__(self, *args: Any) -> Selector[P, R]:
        keys = self._key_fn(*args)
        if not isinstance(keys, (tuple, list)):
            name = getattr(self._key_fn, "__qualname__", repr(self._key_fn))
            raise TypeError(
                f"Key function {name} must return a tuple or list, got {type(keys).__name__}"
            )
        return self._tree.resolve(tuple(keys))

    def __len__(self) -> int:
        return len(self._tree)

    def clear(self) -> None:
        """Discard every keyed instance and its results."""
        self._tree.clear()

    def __repr__(self) -> str:
        return f"FamilySelector(instances={len(self._tree)})"


__all__ = ("KeyTree", "FamilySelector", "key_token")
