# src/study_buddy/errors.py

from __future__ import annotations


class StudyBuddyError(Exception):
    """Base class for errors the UI layer turns into user-visible messages."""


class NavigationError(StudyBuddyError):
    """Raised on a section transition that does not pass through Home."""


class UnknownCategoryError(StudyBuddyError):
    """Raised when a quick-task category is not one of the known buttons."""


class NotificationError(StudyBuddyError):
    """Raised by a notification scheduler when a trigger cannot be registered."""
