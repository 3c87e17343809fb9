"""
Selector — memoized, structured selectors.

    from memosel import selector as M

    visible = (
        M.memo()
        .family(lambda props: (props.list_id,))
        .use("filter", get_filter)
        .use("todos", get_todos)
        .build(lambda f, list_id: filter_todos(f["filter"], f["todos"]))
    )
    todos = visible(props)(state)
"""

from __future__ import annotations

from memosel.selector._types import (
    InputFn,
    GroupFn,
    KeyFn,
    ResultFn,
    EqualFn,
    strict_equal,
    same_keys,
    Field,
    Group,
    Input,
    Slot,
    MemoSpec,
    ConfigError,
    ConfigErrorKind,
)
from memosel.selector._slots import SlotCache
from memosel.selector._detect import select, changed
from memosel.selector._instance import Selector
from memosel.selector._tree import KeyTree, FamilySelector, key_token
from memosel.selector._builder import Memo, memo

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
    "ConfigError",
    "ConfigErrorKind",
    "SlotCache",
    "select",
    "changed",
    "Selector",
    "KeyTree",
    "FamilySelector",
    "key_token",
    "Memo",
    "memo",
)
