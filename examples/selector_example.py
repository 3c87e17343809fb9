"""
Selector — memoized views over a large state object.

Key concepts:
- Inputs = cheap extractors, re-run on every call
- Result function = expensive derivation, re-run only when an input changed
- Family = one independent cache per key (here: per todo list)
"""

from dataclasses import replace
from typing import Any

from memosel import memo
from examples._infra import banner, Props, State, filter_todos


runs = 0


def visible(fields: dict[str, Any], list_id: int) -> list:
    global runs
    runs += 1
    print(f"  [COMPUTE] list {list_id}: filter={fields['filter']}")
    return filter_todos(fields["filter"], fields["todos"])


# ═══════════════════════════════════════════════════════════════════════════════
# 1. FAMILY SELECTOR — keyed by list id
# ═══════════════════════════════════════════════════════════════════════════════

get_visible_todos = (
    memo()
    .family(lambda props: (props.list_id,))
    .use("filter", lambda s, list_id: s.todo_lists[list_id].filter)
    .use("todos", lambda s, list_id: s.todo_lists[list_id].todos)
    .build(visible)
)


# ═══════════════════════════════════════════════════════════════════════════════
# 2. STRUCTURED SELECTOR — no result function, fields are the result
# ═══════════════════════════════════════════════════════════════════════════════

get_counts = (
    memo()
    .size(4)
    .use("lists", lambda s: len(s.todo_lists))
    .use_group(lambda s: {"first": s.todo_lists[1]})
    .build()
)


def main() -> None:
    banner("Selector: Keyed Families")
    state = State()

    print("\n1. First read of each list (compute):")
    for list_id in (1, 2, 3):
        titles = [t.title for t in get_visible_todos(Props(list_id))(state)]
        print(f"   list {list_id} → {titles}")

    print("\n2. Same state again (no compute):")
    for list_id in (1, 2, 3):
        get_visible_todos(Props(list_id))(state)
    print(f"   result function runs: {runs}")

    print("\n3. Change list 2's filter (only list 2 recomputes):")
    state.todo_lists[2] = replace(state.todo_lists[2], filter="active")
    for list_id in (1, 2, 3):
        get_visible_todos(Props(list_id))(state)
    print(f"   result function runs: {runs}")

    print("\n4. Clear the family (everything recomputes):")
    get_visible_todos.clear()
    get_visible_todos(Props(1))(state)
    print(f"   result function runs: {runs}")

    banner("Selector: Structured")
    print(f"   {get_counts(state)}")
    print(f"   same object: {get_counts(state) is get_counts(state)}")

    print("\nDone!")


if __name__ == "__main__":
    main()
