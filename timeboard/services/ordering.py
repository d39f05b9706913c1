"""Lane ordering for tasks.

A lane is the set of tasks sharing ``(org_id, project_id, status)``. Inside a
lane ``order_index`` is a comparison key, not a dense index: gaps and
duplicates are allowed, and ties resolve newest-first by ``created_at``.

Everything here is pure; the task service feeds it rows fetched from the
store.
"""

import uuid
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from timeboard.clock import as_utc
from timeboard.models.enums import TaskStatus

LANES: tuple[TaskStatus, ...] = tuple(TaskStatus)

class AncestryError(ValueError):
    """The parent chain loops or is deeper than allowed."""

def parse_status(value: Any) -> TaskStatus | None:
    """Map a stored status to a lane, or None for values outside the enum."""
    if isinstance(value, TaskStatus):
        return value
    try:
        return TaskStatus(value)
    except ValueError:
        return None

def next_order_index(current_max: int | None) -> int:
    """Index that appends to a lane whose largest index is ``current_max``."""
    if current_max is None:
        return 0
    return current_max + 1

def sort_lane(tasks: Iterable[Any]) -> list[Any]:
    # two stable passes: newest first, then order_index ascending
    newest_first = sorted(tasks, key=lambda t: as_utc(t.created_at), reverse=True)
    return sorted(newest_first, key=lambda t: t.order_index)

def project_to_board(tasks: Iterable[Any]) -> dict[TaskStatus, list[Any]]:
    """Split tasks into the four lanes, each in canonical order.

    Every lane is present even when empty. Tasks whose status is not a
    ``TaskStatus`` have no lane and are left out.
    """
    lanes: dict[TaskStatus, list[Any]] = {status: [] for status in LANES}
    for task in tasks:
        status = parse_status(task.status)
        if status is None:
            continue
        lanes[status].append(task)
    return {status: sort_lane(items) for status, items in lanes.items()}

def ancestry(
    start_id: uuid.UUID,
    parent_of: Callable[[uuid.UUID], uuid.UUID | None],
    max_depth: int,
) -> list[uuid.UUID]:
    """Ids from ``start_id`` up to its root, ``start_id`` first.

    ``parent_of`` returns the parent id of a task, or None at the root.
    Raises AncestryError if the walk revisits a task or exceeds ``max_depth``.
    """
    chain: list[uuid.UUID] = []
    seen: set[uuid.UUID] = set()
    current: uuid.UUID | None = start_id
    while current is not None:
        if current in seen:
            raise AncestryError("parent chain contains a cycle")
        if len(chain) >= max_depth:
            raise AncestryError(f"parent chain deeper than {max_depth}")
        seen.add(current)
        chain.append(current)
        current = parent_of(current)
    return chain

def apply_order(tasks: Sequence[Any], pairs: Iterable[tuple[uuid.UUID, int]]) -> None:
    """Set ``order_index`` on in-memory tasks; later pairs win for repeated ids."""
    by_id = {t.id: t for t in tasks}
    for task_id, order_index in pairs:
        by_id[task_id].order_index = order_index
