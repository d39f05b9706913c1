import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from timeboard.models.enums import TaskStatus
from timeboard.services import ordering

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)

def card(status, order_index, minutes=0, title=""):
    return SimpleNamespace(
        id=uuid.uuid4(),
        title=title,
        status=status,
        order_index=order_index,
        created_at=T0 + timedelta(minutes=minutes),
    )

def titles(lane):
    return [t.title for t in lane]

def test_next_order_index():
    assert ordering.next_order_index(None) == 0
    assert ordering.next_order_index(0) == 1
    assert ordering.next_order_index(41) == 42

def test_parse_status():
    assert ordering.parse_status("IN_REVIEW") is TaskStatus.in_review
    assert ordering.parse_status(TaskStatus.done) is TaskStatus.done
    assert ordering.parse_status("BLOCKED") is None
    assert ordering.parse_status("todo") is None

def test_board_has_every_lane_in_order():
    board = ordering.project_to_board([])
    assert list(board) == [TaskStatus.todo, TaskStatus.in_progress, TaskStatus.in_review, TaskStatus.done]
    assert all(lane == [] for lane in board.values())

def test_lane_sorted_by_order_index_then_newest_first():
    tasks = [
        card("TODO", 2, minutes=0, title="c"),
        card("TODO", 0, minutes=1, title="a-old"),
        card("TODO", 0, minutes=5, title="a-new"),
        card("TODO", -3, minutes=2, title="neg"),
        card("DONE", 7, minutes=3, title="d"),
    ]
    board = ordering.project_to_board(tasks)
    assert titles(board[TaskStatus.todo]) == ["neg", "a-new", "a-old", "c"]
    assert titles(board[TaskStatus.done]) == ["d"]
    assert board[TaskStatus.in_progress] == []

def test_sort_lane_accepts_naive_timestamps():
    # sqlite hands back naive datetimes; they sort as UTC next to aware ones
    naive = card("TODO", 0, minutes=10, title="naive")
    naive.created_at = naive.created_at.replace(tzinfo=None)
    aware = card("TODO", 0, minutes=5, title="aware")
    assert titles(ordering.sort_lane([aware, naive])) == ["naive", "aware"]

def test_unknown_status_is_left_off_the_board():
    tasks = [card("TODO", 0, title="keep"), card("BLOCKED", 0, title="legacy")]
    board = ordering.project_to_board(tasks)
    on_board = [t.title for lane in board.values() for t in lane]
    assert on_board == ["keep"]

def test_sort_lane_is_deterministic_for_same_input():
    tasks = [card("TODO", i % 3, minutes=i, title=str(i)) for i in range(9)]
    first = titles(ordering.sort_lane(tasks))
    again = titles(ordering.sort_lane(list(reversed(tasks))))
    assert first == again

def test_apply_order_last_pair_wins_for_duplicate_ids():
    a, b = card("TODO", 0), card("TODO", 1)
    ordering.apply_order([a, b], [(a.id, 5), (b.id, 3), (a.id, 9)])
    assert a.order_index == 9
    assert b.order_index == 3

def test_apply_order_does_not_touch_unlisted_tasks():
    a, b = card("TODO", 0), card("TODO", 1)
    ordering.apply_order([a, b], [(a.id, 5)])
    assert b.order_index == 1

def _parents(pairs):
    table = dict(pairs)
    return lambda task_id: table.get(task_id)

def test_ancestry_walks_to_root():
    a, b, c = uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    parent_of = _parents({c: b, b: a, a: None})
    assert ordering.ancestry(c, parent_of, max_depth=32) == [c, b, a]

def test_ancestry_rejects_existing_loop():
    a, b = uuid.uuid4(), uuid.uuid4()
    parent_of = _parents({a: b, b: a})
    with pytest.raises(ordering.AncestryError):
        ordering.ancestry(a, parent_of, max_depth=32)

def test_ancestry_rejects_chains_past_max_depth():
    ids = [uuid.uuid4() for _ in range(5)]
    parent_of = _parents({ids[i]: ids[i + 1] for i in range(4)})
    assert len(ordering.ancestry(ids[0], parent_of, max_depth=5)) == 5
    with pytest.raises(ordering.AncestryError):
        ordering.ancestry(ids[0], parent_of, max_depth=4)

def test_ancestry_contains_every_ancestor():
    a, b, c, d = uuid.uuid4(), uuid.uuid4(), uuid.uuid4(), uuid.uuid4()
    # c -> b -> a
    parent_of = _parents({c: b, b: a})

    # a under c would close a loop: a is already in c's chain
    assert a in ordering.ancestry(c, parent_of, 32)
    assert c not in ordering.ancestry(a, parent_of, 32)
    assert d not in ordering.ancestry(c, parent_of, 32)
