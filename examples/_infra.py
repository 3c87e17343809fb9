"""Shared infrastructure for examples."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field


# Types
@dataclass(frozen=True, slots=True)
class Todo:
    id: int
    title: str
    completed: bool = False


@dataclass(frozen=True, slots=True)
class TodoList:
    filter: str
    todos: tuple[Todo, ...]


@dataclass(frozen=True, slots=True)
class Props:
    list_id: int


# Fake store
@dataclass(slots=True)
class State:
    todo_lists: dict[int, TodoList] = field(default_factory=lambda: {
        1: TodoList("all", TODOS),
        2: TodoList("completed", TODOS),
        3: TodoList("active", TODOS),
    })


TODOS = (
    Todo(1, "write docs"),
    Todo(2, "ship release", completed=True),
    Todo(3, "fix flaky test", completed=True),
)


def filter_todos(filter: str, todos: tuple[Todo, ...]) -> list[Todo]:
    match filter:
        case "completed":
            return [t for t in todos if t.completed]
        case "active":
            return [t for t in todos if not t.completed]
        case _:
            return list(todos)


# Helpers
def banner(title: str) -> None:
    print(f"\n{'─' * 50}\n{title}\n{'─' * 50}")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:
    asyncio.run(main())
