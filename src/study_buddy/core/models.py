# src/study_buddy/core/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


def _new_id() -> str:
    return uuid.uuid4().hex


class Section(StrEnum):
    """Top-level feature areas. Home is represented by `None`."""

    TASKS = "tasks"
    WELLNESS = "wellness"
    CHALLENGES = "challenges"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, raw: str | None) -> Section | None:
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class PermissionState(StrEnum):
    UNKNOWN = "unknown"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(slots=True)
class TaskItem:
    """
    A single list entry: either a user task or a reminder placeholder.

    `id` is generated at creation and never changes; everything that needs to
    find an item later (delayed removal, reminder bookkeeping) goes through it.
    """

    title: str
    is_completed: bool = False
    is_reminder: bool = False
    id: str = field(default_factory=_new_id)


@dataclass(slots=True, frozen=True)
class ActiveReminder:
    request_id: str
    task_id: str
    label: str
    interval_seconds: float
    created_at: float
