# src/study_buddy/reminders/reminder_api.py

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from ..core.models import ActiveReminder, PermissionState, TaskItem
from ..core.state import AppState

logger = logging.getLogger(__name__)

REMINDER_TITLE_TEMPLATE = "⏰ {label} Reminder (every 2 hrs)"

DENIED_NOTICE = "Notifications are turned off, so this reminder will only appear in your task list."

PERMISSION_ERROR_NOTICE = "Could not ask for notification permission. Try again later."


def reminder_title(label: str) -> str:
    return REMINDER_TITLE_TEMPLATE.format(label=label)


async def ensure_permission(state: AppState) -> bool:
    """
    Ask the notification service for permission once per session.

    The answer is kept on the state so the UI can show it; a denial is never
    dropped silently.
    """
    if state.notification_permission != PermissionState.UNKNOWN:
        return state.notification_permission == PermissionState.GRANTED

    try:
        granted = bool(await state.notifier.request_permission())
    except Exception:
        # Left UNKNOWN so the next reminder asks again.
        logger.exception("request_permission failed")
        state.notice = PERMISSION_ERROR_NOTICE
        return False

    state.notification_permission = PermissionState.GRANTED if granted else PermissionState.DENIED
    if not granted:
        state.notice = "Notification permission was denied. Reminders will not pop up."
    logger.info("Notification permission: %s", state.notification_permission.value)
    return granted


async def add_reminder_task(state: AppState, label: str) -> TaskItem | None:
    """
    Put a reminder entry at the top of the list and register its repeating trigger.

    - empty label -> no-op (None)
    - permission denied -> entry only, with a notice
    - registration failure -> entry only, with a notice (the app keeps going)
    """
    label = (label or "").strip()
    if not label:
        return None

    task = TaskItem(title=reminder_title(label), is_reminder=True)
    state.tasks.insert(0, task)

    if not await ensure_permission(state):
        if state.notification_permission == PermissionState.DENIED:
            state.notice = DENIED_NOTICE
        logger.info(
            "Reminder %r added without notification (permission %s)",
            label,
            state.notification_permission.value,
        )
        return task

    interval = state.reminder_interval_seconds
    try:
        request_id = await state.notifier.schedule_repeating(
            title=state.reminder_title,
            body=label,
            interval_seconds=interval,
            repeats=True,
        )
    except Exception as e:
        logger.exception("schedule_repeating failed label=%r", label)
        state.notice = f"Could not schedule the reminder ({e}). It stays in your list; try again later."
        return task

    state.active_reminders[request_id] = ActiveReminder(
        request_id=request_id,
        task_id=task.id,
        label=label,
        interval_seconds=interval,
        created_at=time.time(),
    )
    logger.info("Reminder scheduled request_id=%s task_id=%s", request_id, task.id)
    return task


async def submit_reminder_input(state: AppState) -> TaskItem | None:
    """The "Add Reminder" button: consume the pending text buffer."""
    if not state.reminder_input.strip():
        return None
    task = await add_reminder_task(state, state.reminder_input)
    state.reminder_input = ""
    return task


def list_active_reminders(state: AppState) -> list[ActiveReminder]:
    return sorted(state.active_reminders.values(), key=lambda r: r.created_at)


def cancel_reminder(state: AppState, request_id: str) -> bool:
    reminder = state.active_reminders.pop(request_id, None)
    if reminder is None:
        return False

    try:
        state.notifier.cancel(request_id)
    except Exception:
        logger.exception("cancel failed request_id=%s", request_id)
        state.notice = f"Could not cancel the {reminder.label!r} reminder."
        # Keep tracking it so the user can retry.
        state.active_reminders[request_id] = reminder
        return False

    logger.info("Reminder cancelled request_id=%s label=%r", request_id, reminder.label)
    return True


def release_reminders(state: AppState, removed: Iterable[TaskItem]) -> int:
    """Cancel triggers whose list entry is gone. Returns how many were cancelled."""
    gone = {t.id for t in removed if t.is_reminder}
    if not gone:
        return 0

    count = 0
    for request_id, reminder in list(state.active_reminders.items()):
        if reminder.task_id in gone and cancel_reminder(state, request_id):
            count += 1
    return count
