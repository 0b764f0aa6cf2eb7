# src/study_buddy/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- Nothing required at import time; every value has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "STUDYBUDDY"

CONSENT_CHOICES = ("ask", "allow", "deny")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv
    except ImportError:
        return
    load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    raw = _env(name, default).strip().lower()
    return raw if raw in choices else default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    # ---- Tasks ----
    completion_delay_seconds: float

    # ---- Reminders ----
    reminder_interval_seconds: float
    reminder_title: str
    notification_consent: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "StudyBuddy").strip() or "StudyBuddy"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/study_buddy"))

        completion_delay_seconds = max(0.0, _env_float(_k("COMPLETION_DELAY_SECONDS"), 0.5))

        reminder_interval_seconds = _env_float(_k("REMINDER_INTERVAL_SECONDS"), 7200.0)
        if reminder_interval_seconds <= 0:
            reminder_interval_seconds = 7200.0
        reminder_title = _env(_k("REMINDER_TITLE"), "Reminder").strip() or "Reminder"
        notification_consent = _env_choice(_k("NOTIFICATION_CONSENT"), "ask", CONSENT_CHOICES)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            completion_delay_seconds=completion_delay_seconds,
            reminder_interval_seconds=reminder_interval_seconds,
            reminder_title=reminder_title,
            notification_consent=notification_consent,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Load settings once (reads .env on first call)."""
    global _SETTINGS
    if _SETTINGS is None:
        _load_dotenv_if_available()
        _SETTINGS = Settings.from_env()
    return _SETTINGS
