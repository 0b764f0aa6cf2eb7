# src/study_buddy/wellness/tips.py

from __future__ import annotations

from typing import Final

from ..core.state import AppState

MIDDLE_SCHOOL: Final = "Middle School"
HIGH_SCHOOL: Final = "High School"
COLLEGE: Final = "College"

GROUPS: Final[tuple[str, ...]] = (MIDDLE_SCHOOL, HIGH_SCHOOL, COLLEGE)

WELLNESS_TIPS: Final[dict[str, tuple[str, ...]]] = {
    MIDDLE_SCHOOL: (
        "Take breaks when studying to avoid burnout.",
        "Talk to a trusted adult when you're feeling overwhelmed.",
        "Get at least 8-10 hours of sleep every night.",
        "Limit screen time before bed to improve sleep.",
        "Stay active, even 20 mins of movement helps mood.",
    ),
    HIGH_SCHOOL: (
        "Don't compare yourself to others, your journey is unique.",
        "Balance school with things you love to avoid stress.",
        "Stay organized with planners or apps like StudyBuddy!",
        "Set small, realistic goals to avoid procrastination.",
        "Sleep is just as important as studying. Prioritize it.",
    ),
    COLLEGE: (
        "Check in with yourself often, mental health matters.",
        "Don’t overcommit. Rest is productive too.",
        "Stay connected with friends or support groups.",
        "Create boundaries between school and rest time.",
        "Reach out for help if you’re struggling - you’re not alone.",
    ),
}

# Any key outside the table gets the College tips.
FALLBACK_GROUP: Final = COLLEGE

_ALIASES: Final[dict[str, str]] = {
    "middle": MIDDLE_SCHOOL,
    "middle school": MIDDLE_SCHOOL,
    "ms": MIDDLE_SCHOOL,
    "high": HIGH_SCHOOL,
    "high school": HIGH_SCHOOL,
    "hs": HIGH_SCHOOL,
    "college": COLLEGE,
    "uni": COLLEGE,
}


def tips_for(group: str | None) -> tuple[str, ...]:
    return WELLNESS_TIPS.get(group or "", WELLNESS_TIPS[FALLBACK_GROUP])


def resolve_group(text: str) -> str | None:
    """Map user input ("high", "Middle School", ...) to a group name."""
    return _ALIASES.get(" ".join((text or "").lower().split()))


def select_group(state: AppState, group: str) -> tuple[str, ...]:
    state.wellness_group = group
    return tips_for(group)
