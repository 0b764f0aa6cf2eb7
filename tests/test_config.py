# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from study_buddy.config import Settings


def test_defaults(monkeypatch) -> None:
    for name in (
        "STUDYBUDDY_APP_NAME",
        "STUDYBUDDY_LOG_LEVEL",
        "STUDYBUDDY_DATA_DIR",
        "STUDYBUDDY_COMPLETION_DELAY_SECONDS",
        "STUDYBUDDY_REMINDER_INTERVAL_SECONDS",
        "STUDYBUDDY_REMINDER_TITLE",
        "STUDYBUDDY_NOTIFICATION_CONSENT",
    ):
        monkeypatch.delenv(name, raising=False)

    s = Settings.from_env()
    assert s.app_name == "StudyBuddy"
    assert s.log_level == "WARNING"
    assert s.data_dir == Path(".local/study_buddy")
    assert s.completion_delay_seconds == 0.5
    assert s.reminder_interval_seconds == 7200.0
    assert s.reminder_title == "Reminder"
    assert s.notification_consent == "ask"


def test_overrides_and_bad_values(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("STUDYBUDDY_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("STUDYBUDDY_COMPLETION_DELAY_SECONDS", "2")
    monkeypatch.setenv("STUDYBUDDY_REMINDER_INTERVAL_SECONDS", "-5")
    monkeypatch.setenv("STUDYBUDDY_NOTIFICATION_CONSENT", "ALLOW")
    monkeypatch.setenv("STUDYBUDDY_LOG_LEVEL", "debug")

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.completion_delay_seconds == 2.0
    assert s.reminder_interval_seconds == 7200.0
    assert s.notification_consent == "allow"
    assert s.log_level == "DEBUG"

    monkeypatch.setenv("STUDYBUDDY_NOTIFICATION_CONSENT", "sometimes")
    monkeypatch.setenv("STUDYBUDDY_COMPLETION_DELAY_SECONDS", "soon")
    s2 = Settings.from_env()
    assert s2.notification_consent == "ask"
    assert s2.completion_delay_seconds == 0.5
