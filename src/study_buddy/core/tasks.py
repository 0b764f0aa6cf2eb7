# src/study_buddy/core/tasks.py

from __future__ import annotations

"""
Task list mutations.

Ordinary tasks are appended; reminder placeholders are prepended by
reminders.reminder_api. Completed items are pruned after a short delay, and
that pruning always re-locates the item by id: positions captured at
completion time go stale as soon as anything else is added or deleted.
"""

import logging
import time
from collections.abc import Iterable

from ..errors import UnknownCategoryError
from .models import TaskItem
from .state import AppState

logger = logging.getLogger(__name__)

# Quick-category buttons: key -> (button label, task title)
QUICK_TASKS: dict[str, tuple[str, str]] = {
    "study": ("📚 Study", "Study for test"),
    "chores": ("🧹 Chores", "Do chores"),
    "break": ("☕ Break", "Take a short break"),
}


def add_task(state: AppState, title: str) -> TaskItem | None:
    """Append a new task. Empty titles are ignored (returns None)."""
    if not title or not title.strip():
        return None
    task = TaskItem(title=title.strip())
    state.tasks.append(task)
    logger.debug("Task added id=%s title=%r", task.id, task.title)
    return task


def add_quick_task(state: AppState, category: str) -> TaskItem | None:
    key = (category or "").strip().lower()
    entry = QUICK_TASKS.get(key)
    if entry is None:
        raise UnknownCategoryError(
            f"Unknown category: {category!r}. Choose one of: {', '.join(QUICK_TASKS)}."
        )
    return add_task(state, entry[1])


def submit_task_input(state: AppState) -> TaskItem | None:
    """The "Add" button: consume the pending text buffer."""
    if not state.new_task_input.strip():
        return None
    task = add_task(state, state.new_task_input)
    state.new_task_input = ""
    return task


def mark_complete(state: AppState, task_id: str, now_ts: float | None = None) -> bool:
    """
    Flag a task as completed and schedule its removal.

    Returns False when the id is unknown or the task is already completed.
    """
    task = state.find_task(task_id)
    if task is None or task.is_completed:
        return False

    task.is_completed = True
    now = time.monotonic() if now_ts is None else now_ts
    state.pending_removals[task.id] = now + max(0.0, float(state.completion_delay_seconds))
    logger.debug("Task completed id=%s, removal due in %.2fs", task.id, state.completion_delay_seconds)
    return True


def prune_completed(state: AppState, now_ts: float | None = None) -> list[TaskItem]:
    """
    Remove completed tasks whose delay has elapsed.

    Each due entry is looked up by id at this moment; ids that were deleted in
    the meantime are simply forgotten.
    """
    if not state.pending_removals:
        return []

    now = time.monotonic() if now_ts is None else now_ts
    due = [tid for tid, deadline in state.pending_removals.items() if deadline <= now]

    removed: list[TaskItem] = []
    for tid in due:
        del state.pending_removals[tid]
        idx = state.index_of(tid)
        if idx is None:
            continue
        removed.append(state.tasks.pop(idx))

    if removed:
        logger.debug("Pruned %d completed task(s)", len(removed))
    return removed


def remove_tasks_at(state: AppState, positions: Iterable[int]) -> list[TaskItem]:
    """
    Delete the entries at the given 0-based positions (the delete gesture).

    All positions are validated before anything is removed, so a bad index
    leaves the list untouched.
    """
    wanted = sorted(set(int(p) for p in positions))
    size = len(state.tasks)
    for pos in wanted:
        if pos < 0 or pos >= size:
            raise IndexError(f"No task at position {pos + 1}.")

    ids = [state.tasks[pos].id for pos in wanted]
    return remove_tasks_by_id(state, ids)


def remove_tasks_by_id(state: AppState, task_ids: Iterable[str]) -> list[TaskItem]:
    targets = set(task_ids)
    removed = [t for t in state.tasks if t.id in targets]
    if not removed:
        return []

    state.tasks[:] = [t for t in state.tasks if t.id not in targets]
    for task in removed:
        state.pending_removals.pop(task.id, None)

    logger.debug("Removed %d task(s)", len(removed))
    return removed
