# src/study_buddy/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.models import Section
from ..core.navigation import go_back, select_section
from ..core.state import AppState
from ..core.tasks import QUICK_TASKS, add_quick_task, add_task, mark_complete, remove_tasks_at
from ..errors import StudyBuddyError
from ..reminders.reminder_api import (
    add_reminder_task,
    cancel_reminder,
    ensure_permission,
    list_active_reminders,
    release_reminders,
)
from ..wellness.tips import GROUPS, resolve_group, select_group

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Domain errors (StudyBuddyError) become the reply; anything else propagates.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)
            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except StudyBuddyError as e:
            return str(e)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _require_section(state: AppState, section: Section) -> str | None:
    if state.section == section:
        return None
    return f"Open {section.label} first (/back, then /open {section.value})."


def _parse_position(raw: str, size: int) -> int | None:
    """1-based display number -> 0-based position (None if invalid)."""
    raw = raw.rstrip(".")
    if not raw.isdigit():
        return None
    pos = int(raw) - 1
    if pos < 0 or pos >= size:
        return None
    return pos


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    section = state.section.label if state.section else "Home"
    done = sum(1 for t in state.tasks if t.is_completed)
    consent = getattr(state.settings, "notification_consent", "?")
    return (
        "Status:\n"
        f"  Screen: {section}\n"
        f"  Tasks: {len(state.tasks)} ({done} completed)\n"
        f"  Wellness group: {state.wellness_group or '-'}\n"
        f"  Notifications: {state.notification_permission.value} (consent: {consent})\n"
        f"  Active reminders: {len(state.active_reminders)}"
    )


def cmd_open(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /open tasks | wellness | challenges
    """
    if not args:
        return "Usage: /open tasks | wellness | challenges"
    section = Section.parse(args[0])
    if section is None:
        return f"Unknown section: {args[0]}. Choose tasks, wellness or challenges."

    select_section(state, section)

    if section == Section.CHALLENGES:
        if emit:
            with contextlib.suppress(Exception):
                emit("[NOTIFY] Checking notification permission...")
        state.runner.run(ensure_permission(state))

    return f"Opened {section.label}."


def cmd_back(state: AppState, args: list[str]) -> str:
    if not go_back(state):
        return "Already at Home."
    return "Back at Home."


def cmd_add(state: AppState, args: list[str]) -> str:
    if msg := _require_section(state, Section.TASKS):
        return msg
    task = add_task(state, " ".join(args))
    if task is None:
        return "Title required."
    return f"Added: {task.title}"


def cmd_quick(state: AppState, args: list[str]) -> str:
    if msg := _require_section(state, Section.TASKS):
        return msg
    if not args:
        return f"Usage: /quick {' | '.join(QUICK_TASKS)}"
    task = add_quick_task(state, args[0])
    return f"Added: {task.title}" if task else "Nothing added."


def cmd_done(state: AppState, args: list[str]) -> str:
    if msg := _require_section(state, Section.TASKS):
        return msg
    if len(args) != 1:
        return "Usage: /done <n>"
    pos = _parse_position(args[0], len(state.tasks))
    if pos is None:
        return f"No task #{args[0]}."
    task = state.tasks[pos]
    if not mark_complete(state, task.id):
        return f"Task #{pos + 1} is already completed."
    return f"Completed: {task.title}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if msg := _require_section(state, Section.TASKS):
        return msg
    if not args:
        return "Usage: /rm <n> [n...]"
    positions: list[int] = []
    for raw in args:
        pos = _parse_position(raw, len(state.tasks))
        if pos is None:
            return f"No task #{raw}."
        positions.append(pos)

    removed = remove_tasks_at(state, positions)
    cancelled = release_reminders(state, removed)
    reply = f"Removed {len(removed)} task(s)."
    if cancelled:
        reply += f" Cancelled {cancelled} reminder(s)."
    return reply


def cmd_group(state: AppState, args: list[str]) -> str:
    if msg := _require_section(state, Section.WELLNESS):
        return msg
    if not args:
        return f"Usage: /group {' | '.join(GROUPS)}"
    group = resolve_group(" ".join(args))
    if group is None:
        return f"Unknown group. Choose one of: {', '.join(GROUPS)}."
    select_group(state, group)
    return f"Showing tips for {group}."


def cmd_remind(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if msg := _require_section(state, Section.CHALLENGES):
        return msg
    label = " ".join(args).strip()
    if not label:
        return "Usage: /remind <what>  (e.g. /remind Drink water)"
    task = state.runner.run(add_reminder_task(state, label))
    if task is None:
        return "Nothing added."
    if any(r.task_id == task.id for r in state.active_reminders.values()):
        return f"Added: {task.title}"
    return f"Added to list only: {task.title}"


def cmd_reminders(state: AppState, args: list[str]) -> str:
    active = list_active_reminders(state)
    if not active:
        return "No active reminders."
    lines = ["Active reminders:"]
    for i, r in enumerate(active, start=1):
        hours = r.interval_seconds / 3600
        lines.append(f"  {i}. {r.label} (every {hours:g} h)")
    return "\n".join(lines)


def cmd_cancel(state: AppState, args: list[str]) -> str:
    active = list_active_reminders(state)
    if len(args) != 1:
        return "Usage: /cancel <n>  (see /reminders)"
    pos = _parse_position(args[0], len(active))
    if pos is None:
        return f"No reminder #{args[0]}."
    reminder = active[pos]
    if not cancel_reminder(state, reminder.request_id):
        return f"Could not cancel {reminder.label!r}."
    return f"Cancelled reminder: {reminder.label}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show screen, task and reminder counters.")
registry.register(
    "open", cmd_open, help_text="Open a section: /open tasks | wellness | challenges.", aliases=["go"]
)
registry.register("back", cmd_back, help_text="Return to Home.", aliases=["home"])
registry.register("add", cmd_add, help_text="(Tasks) Add a task: /add <title>.")
registry.register("quick", cmd_quick, help_text="(Tasks) Quick task: /quick study | chores | break.")
registry.register("done", cmd_done, help_text="(Tasks) Complete task #n: /done <n>.")
registry.register("rm", cmd_rm, help_text="(Tasks) Delete tasks: /rm <n> [n...].", aliases=["delete"])
registry.register(
    "group", cmd_group, help_text="(Wellness) Pick a group: /group middle | high | college."
)
registry.register("remind", cmd_remind, help_text="(Challenges) Repeat a reminder every 2 hours.")
registry.register("reminders", cmd_reminders, help_text="List active reminders.")
registry.register("cancel", cmd_cancel, help_text="Cancel active reminder #n: /cancel <n>.")
