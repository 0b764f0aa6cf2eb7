# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from study_buddy.core.state import AppState

from .fakes import FakeNotificationScheduler, InlineRunner


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the command layer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="StudyBuddy",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        completion_delay_seconds=0.5,
        reminder_interval_seconds=7200.0,
        reminder_title="Reminder",
        notification_consent="allow",
    )


@pytest.fixture()
def notifier() -> FakeNotificationScheduler:
    return FakeNotificationScheduler()


@pytest.fixture()
def state(settings: SimpleNamespace, notifier: FakeNotificationScheduler) -> AppState:
    """AppState wired with deterministic fakes."""
    return AppState(
        settings=settings,
        notifier=notifier,
        runner=InlineRunner(),
        completion_delay_seconds=settings.completion_delay_seconds,
        reminder_interval_seconds=settings.reminder_interval_seconds,
        reminder_title=settings.reminder_title,
    )
