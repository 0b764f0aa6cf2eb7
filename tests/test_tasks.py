# tests/test_tasks.py

from __future__ import annotations

import pytest

from study_buddy.core.tasks import (
    add_quick_task,
    add_task,
    mark_complete,
    prune_completed,
    remove_tasks_at,
    remove_tasks_by_id,
    submit_task_input,
)
from study_buddy.errors import UnknownCategoryError


def test_add_task_appends_incomplete_item(state) -> None:
    add_task(state, "Read chapter 3")
    task = add_task(state, "Email tutor")

    assert task is not None
    assert len(state.tasks) == 2
    assert state.tasks[-1] is task
    assert task.title == "Email tutor"
    assert task.is_completed is False


@pytest.mark.parametrize("title", ["", "   "])
def test_add_task_with_empty_title_is_noop(state, title) -> None:
    add_task(state, "existing")
    assert add_task(state, title) is None
    assert len(state.tasks) == 1


def test_ids_are_unique(state) -> None:
    for i in range(20):
        add_task(state, f"t{i}")
    assert len({t.id for t in state.tasks}) == 20


def test_quick_categories(state) -> None:
    add_quick_task(state, "study")
    add_quick_task(state, "Chores")
    add_quick_task(state, "break")
    assert [t.title for t in state.tasks] == ["Study for test", "Do chores", "Take a short break"]

    with pytest.raises(UnknownCategoryError):
        add_quick_task(state, "nap")


def test_submit_task_input_clears_buffer(state) -> None:
    state.new_task_input = "Practice piano"
    task = submit_task_input(state)
    assert task is not None and task.title == "Practice piano"
    assert state.new_task_input == ""

    state.new_task_input = ""
    assert submit_task_input(state) is None
    assert len(state.tasks) == 1


def test_mark_complete_sets_flag_and_prunes_after_delay(state) -> None:
    task = add_task(state, "Finish essay")
    assert mark_complete(state, task.id, now_ts=100.0)
    assert task.is_completed is True
    assert state.tasks == [task]

    assert prune_completed(state, now_ts=100.4) == []
    assert state.tasks == [task]

    removed = prune_completed(state, now_ts=100.5)
    assert removed == [task]
    assert state.tasks == []
    assert state.pending_removals == {}


def test_mark_complete_unknown_or_already_completed(state) -> None:
    task = add_task(state, "x")
    assert mark_complete(state, "nope", now_ts=0.0) is False
    assert mark_complete(state, task.id, now_ts=0.0) is True
    assert mark_complete(state, task.id, now_ts=0.3) is False
    # The first deadline is kept.
    assert state.pending_removals[task.id] == pytest.approx(0.5)


def test_delayed_removal_uses_id_not_stale_position(state) -> None:
    a = add_task(state, "a")
    b = add_task(state, "b")
    c = add_task(state, "c")

    # b sits at position 1 when completed.
    mark_complete(state, b.id, now_ts=10.0)

    # The list changes shape during the delay window: position 1 is now c.
    remove_tasks_by_id(state, [a.id])
    d = add_task(state, "d")

    removed = prune_completed(state, now_ts=11.0)

    assert removed == [b]
    assert state.tasks == [c, d]


def test_delayed_removal_skips_already_deleted_item(state) -> None:
    a = add_task(state, "a")
    b = add_task(state, "b")
    mark_complete(state, a.id, now_ts=0.0)
    remove_tasks_by_id(state, [a.id])

    assert prune_completed(state, now_ts=5.0) == []
    assert state.tasks == [b]


def test_two_completions_in_same_window(state) -> None:
    a = add_task(state, "a")
    b = add_task(state, "b")
    c = add_task(state, "c")
    mark_complete(state, a.id, now_ts=0.0)
    mark_complete(state, c.id, now_ts=0.2)

    assert prune_completed(state, now_ts=0.6) == [a]
    assert state.tasks == [b, c]
    assert prune_completed(state, now_ts=0.7) == [c]
    assert state.tasks == [b]


def test_remove_tasks_at_positions_keeps_rest_in_order(state) -> None:
    items = [add_task(state, n) for n in "abcde"]
    before = {t.id for t in items}

    removed = remove_tasks_at(state, [3, 1])

    assert [t.title for t in removed] == ["b", "d"]
    assert [t.title for t in state.tasks] == ["a", "c", "e"]
    assert {t.id for t in state.tasks} == before - {items[1].id, items[3].id}


def test_remove_tasks_at_invalid_position_leaves_list_untouched(state) -> None:
    for n in "abc":
        add_task(state, n)
    with pytest.raises(IndexError):
        remove_tasks_at(state, [0, 7])
    assert [t.title for t in state.tasks] == ["a", "b", "c"]


def test_remove_clears_pending_removal(state) -> None:
    a = add_task(state, "a")
    mark_complete(state, a.id, now_ts=0.0)
    remove_tasks_at(state, [0])
    assert state.pending_removals == {}
