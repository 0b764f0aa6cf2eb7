# src/study_buddy/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.models import Section
from ..core.navigation import select_section
from ..core.state import AppState
from ..core.tasks import QUICK_TASKS, prune_completed, submit_task_input
from ..errors import StudyBuddyError
from ..reminders.reminder_api import (
    ensure_permission,
    list_active_reminders,
    release_reminders,
    submit_reminder_input,
)
from ..wellness.tips import GROUPS, resolve_group, select_group, tips_for

logger = logging.getLogger(__name__)

RULE = "-" * 40


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleMessenger:
    """OutboundMessenger that prints fired notifications into the terminal."""

    async def send_text(self, *, text: str) -> None:
        print(f"\n[{_ts_local()}] 🔔 {text}", flush=True)


def ask_yes_no(question: str) -> bool:
    try:
        answer = input(question)
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


# -------------------- rendering --------------------


def _render_home(state: AppState) -> list[str]:
    lines = ["Where to?"]
    for section in Section:
        lines.append(f"  [{section.label}]")
    lines.append("")
    lines.append("Type a section name (or /open <section>).")
    return lines


def _render_tasks(state: AppState) -> list[str]:
    lines = ["Choose a Task Category"]
    lines.append("  " + "   ".join(f"{label} (/quick {key})" for key, (label, _) in QUICK_TASKS.items()))
    lines.append(RULE)
    if not state.tasks:
        lines.append("  (no tasks yet)")
    for i, task in enumerate(state.tasks, start=1):
        mark = "✓" if task.is_completed else " "
        lines.append(f"  {i}. [{mark}] {task.title}")
    lines.append(RULE)
    lines.append("Type a task to add it. /done <n> completes, /rm <n> deletes.")
    return lines


def _render_wellness(state: AppState) -> list[str]:
    lines = ["Choose Your Group"]
    lines.append("  " + "   ".join(f"[{g}]" for g in GROUPS))
    group = state.wellness_group
    if group:
        lines.append("")
        lines.append(f"Wellness Tips for {group}")
        for tip in tips_for(group):
            lines.append(f"  • {tip}")
    return lines


def _render_challenges(state: AppState) -> list[str]:
    lines = ["What do you want reminders for every few hours?"]
    lines.append("  e.g. Drink water")
    active = list_active_reminders(state)
    if active:
        lines.append("")
        lines.append("Active reminders:")
        for i, r in enumerate(active, start=1):
            lines.append(f"  {i}. {r.label}")
    lines.append("")
    lines.append(f"Notifications: {state.notification_permission.value}")
    return lines


_VIEWS = {
    Section.TASKS: _render_tasks,
    Section.WELLNESS: _render_wellness,
    Section.CHALLENGES: _render_challenges,
}


def render_screen(state: AppState) -> str:
    """Render the current view as plain text."""
    app_name = str(getattr(state.settings, "app_name", "StudyBuddy"))
    if state.section is None:
        header = f"== {app_name} =="
        body = _render_home(state)
    else:
        header = f"== {app_name} / {state.section.label} ==   (/back for Home)"
        body = _VIEWS[state.section](state)
    return "\n".join([header, *body])


# -------------------- input handling --------------------


def handle_plain_input(state: AppState, text: str) -> str | None:
    """
    Non-command input acts on whatever the current view offers:
    Home -> section name, Tasks -> new task, Wellness -> group,
    Challenges -> reminder label.
    """
    text = text.strip()
    if not text:
        return None

    if state.section is None:
        section = Section.parse(text)
        if section is None:
            return "Pick a section: tasks, wellness or challenges."
        select_section(state, section)
        if section == Section.CHALLENGES:
            state.runner.run(ensure_permission(state))
        return None

    if state.section == Section.TASKS:
        state.new_task_input = text
        submit_task_input(state)
        return None

    if state.section == Section.WELLNESS:
        group = resolve_group(text)
        if group is None:
            return f"Unknown group. Choose one of: {', '.join(GROUPS)}."
        select_group(state, group)
        return None

    state.reminder_input = text
    state.runner.run(submit_reminder_input(state))
    return None


def pump_timers(state: AppState) -> None:
    """Fire due auto-removals and drop reminders whose entry went with them."""
    removed = prune_completed(state)
    if removed:
        release_reminders(state, removed)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        # Prune only right before drawing: typed row numbers refer to the last screen.
        pump_timers(state)
        print()
        print(render_screen(state))
        notice = state.take_notice()
        if notice:
            _print_ts(f"[!] {notice}")

        try:
            user_input = input("\n>>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input, emit=emit)
            if reply is None:
                reply = handle_plain_input(state, user_input)
        except StudyBuddyError as e:
            reply = str(e)
        except Exception:
            logger.exception("Console input handler crashed.")
            reply = "Internal error while handling your input."

        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")
