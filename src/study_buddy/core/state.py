# src/study_buddy/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from .models import ActiveReminder, PermissionState, Section, TaskItem
from .ports import CoroutineRunner, NotificationScheduler


@dataclass
class AppState:
    """
    The single store the presentation layer renders from.

    Holds list data, navigation, input buffers and reminder bookkeeping.
    Mutations go through the functions in core.tasks, core.navigation,
    wellness.tips and reminders.reminder_api; nothing here is ambient.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    notifier: NotificationScheduler
    runner: CoroutineRunner

    tasks: list[TaskItem] = field(default_factory=list)

    section: Section | None = None
    wellness_group: str | None = None
    new_task_input: str = ""
    reminder_input: str = ""

    notification_permission: PermissionState = PermissionState.UNKNOWN
    # request_id -> reminder
    active_reminders: dict[str, ActiveReminder] = field(default_factory=dict)
    # task_id -> monotonic deadline
    pending_removals: dict[str, float] = field(default_factory=dict)

    completion_delay_seconds: float = 0.5
    reminder_interval_seconds: float = 7200
    reminder_title: str = "Reminder"

    # Latest user-visible condition (permission denied, scheduling failed, ...).
    notice: str | None = None

    @property
    def at_home(self) -> bool:
        return self.section is None

    def index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return None

    def find_task(self, task_id: str) -> TaskItem | None:
        idx = self.index_of(task_id)
        return None if idx is None else self.tasks[idx]

    def take_notice(self) -> str | None:
        notice, self.notice = self.notice, None
        return notice
