# src/study_buddy/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- starts the background loop the notification service runs on,
- wires concrete implementations into AppState.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable

from ..config import get_settings
from ..core.ports import OutboundMessenger
from ..core.state import AppState
from ..reminders.notification_center import BackgroundLoop, LocalNotificationCenter

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    messenger: OutboundMessenger,
    settings=None,
    prompt: Callable[[str], bool] | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    runner = BackgroundLoop().start()
    notifier = LocalNotificationCenter(
        messenger,
        consent=settings.notification_consent,
        prompt=prompt,
        app_name=settings.app_name,
    )

    state = AppState(
        settings=settings,
        notifier=notifier,
        runner=runner,
        completion_delay_seconds=settings.completion_delay_seconds,
        reminder_interval_seconds=settings.reminder_interval_seconds,
        reminder_title=settings.reminder_title,
    )
    logger.info(
        "State ready (consent=%s, reminder every %ss).",
        settings.notification_consent,
        settings.reminder_interval_seconds,
    )
    return state


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    notifier = state.notifier
    runner = state.runner

    if isinstance(notifier, LocalNotificationCenter) and isinstance(runner, BackgroundLoop):
        try:
            runner.run(notifier.shutdown(), timeout=5.0)
        except Exception:
            logger.exception("Notification center shutdown failed.")

    if isinstance(runner, BackgroundLoop):
        with contextlib.suppress(Exception):
            runner.stop()

    state.active_reminders.clear()
