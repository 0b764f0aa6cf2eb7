# src/study_buddy/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


# Longest prefix first. Notification firing runs on the loop thread while the
# REPL sits in input(), so its routine INFO lines stay in the file log only.
_CONSOLE_THRESHOLDS: tuple[tuple[str, int], ...] = (
    ("study_buddy.reminders.notification_center", logging.WARNING),
    ("study_buddy", logging.NOTSET),
    ("asyncio", logging.WARNING),
)


def _console_threshold(name: str) -> int:
    for prefix, level in _CONSOLE_THRESHOLDS:
        if name == prefix or name.startswith(prefix + "."):
            return level
    return logging.ERROR


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the REPL screen readable:
    - study_buddy logs pass (the handler level still applies)
    - the background notification service only at WARNING+
    - asyncio at WARNING+ (a dying trigger task shows up there)
    - everything else, captured warnings included, only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _console_threshold(record.name)


def setup_logging(
    *,
    log_dir: str | Path = ".local/study_buddy",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging with:
    - Console handler: stderr, filtered so the REPL screen stays readable
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info). Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "study_buddy.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    return log_file
